X_DIM = "x"
Y_DIM = "y"
Z_DIM = "z"
HORIZONTAL_DIMS = [X_DIM, Y_DIM]

TEMP = "air_temperature"
PRESSURE = "air_pressure"
DENSITY = "air_density"
HEIGHT = "height"
REFLECTIVITY = "reflectivity"
IC_FLASH_RATE = "ic_flash_rate"
CG_FLASH_RATE = "cg_flash_rate"

IC_TENDENCY = "lnox_ic_tend"
CG_TENDENCY = "lnox_cg_tend"

REQUIRED_INPUTS = [
    TEMP,
    PRESSURE,
    DENSITY,
    HEIGHT,
    REFLECTIVITY,
    IC_FLASH_RATE,
    CG_FLASH_RATE,
]
