"""
rechargekit_core.constants
--------------------------
Fixed unit constants shared by the calculator.

US customary units throughout: acres, feet, inches, acre-feet (AF).
These never change at runtime.
"""

FT2_PER_ACRE = 43_560.0  # square feet in one acre (also ft³ in one AF)
IN_PER_FT = 12.0  # inches per foot
SEC_PER_DAY = 86_400.0  # 24 * 3600
GPM_PER_CFS = 448.831  # gallons per minute in one cubic foot per second
FT3_PER_YD3 = 27.0  # cubic feet in one cubic yard (earthwork)
