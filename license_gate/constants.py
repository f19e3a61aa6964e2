"""Constants for license-gate."""

# Exit codes
EXIT_SUCCESS = 0  # No violations found
EXIT_ISSUES = 1  # Disallowed license found
EXIT_ERROR = 2  # Check failed due to error

# Distribution name of this tool. Always allowed by the policy.
PLUGIN_PACKAGE_NAME = "license-gate"

# Table under [tool] in pyproject.toml holding the policy
CONFIG_TABLE = "license-gate"

# Policy configuration keys
WHITELIST_KEY = "whitelist"
BLACKLIST_KEY = "blacklist"
WHITELISTED_PACKAGES_KEY = "whitelisted-packages"
