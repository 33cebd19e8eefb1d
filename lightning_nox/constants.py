# universal gas constant [J/mol/K], value used by the WRF LNOx schemes
GAS_CONSTANT = 8.314
FREEZING_TEMPERATURE = 273.15
# [dBZ], grid cells above this are part of a convective cell
REFLECTIVITY_THRESHOLD = 20.0
# mol NO / mol air -> ppmv
PPMV_PER_MIXING_RATIO = 1e6
