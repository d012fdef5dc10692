"""
Static data for the Brazilian national holidays.
"""

# (month, day, Portuguese name, English name)
FIXED_HOLIDAYS = (
    (1, 1, "Confraternização Universal", "New Year's Day"),
    (4, 21, "Tiradentes", "Tiradentes' Day"),
    (5, 1, "Dia do Trabalho", "Labour Day"),
    (9, 7, "Independência do Brasil", "Independence Day"),
    (10, 12, "Nossa Senhora Aparecida", "Our Lady of Aparecida"),
    (11, 2, "Finados", "All Souls' Day"),
    (11, 15, "Proclamação da República", "Republic Proclamation Day"),
    (12, 25, "Natal", "Christmas Day"),
)

# (offset in days from Easter Sunday, Portuguese name, English name)
EASTER_HOLIDAYS = (
    (0, "Páscoa", "Easter Sunday"),
    (-47, "Carnaval", "Carnival"),
    (-2, "Paixão de Cristo", "Good Friday"),
    (60, "Corpus Christi", "Corpus Christi"),
)

COUNTRY_CODE = "BR"
