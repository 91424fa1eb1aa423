"""Default denominations for the Crescent LUNA/UST exposure snapshot."""

UST_DENOM = "ibc/6F4968A73F90CF7DE6394BF937D6DF7C7D162D74D839C13F53B41157D315E05F"
LUNA_DENOM = "ibc/4627AD2524E3E0523047E35BB76CC90E37D9D57ACF14F0FCBCEB2480705F3CB8"

DEFAULT_TARGET_DENOMS: dict[str, str] = {
    "LUNA": LUNA_DENOM,
    "UST": UST_DENOM,
}

DEFAULT_OUTPUT_FILE = "result.csv"
LOCAL_CONFIG_FILE = "lp-exposure.toml"
CONFIG_ENV_VAR = "LP_EXPOSURE_CONFIG"
