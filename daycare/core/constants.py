USER_ROLES = ("parent", "staff", "director")

# Roles allowed on the classroom floor (check-ins, ratios, reports)
CARE_ROLES = ("staff", "director")

HOURS_PRECISION = 2
