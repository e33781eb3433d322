"""Names shared across layers."""

NON_CAMEL_CASE_TYPES = "non_camel_case_types"

LINT_LEVEL_ATTRIBUTES = ("allow", "warn", "deny", "forbid")

CONFIG_SECTION = "camelcase-lint"

ROOT_SCOPE = "crate"

# Error codes for hard errors raised while collecting lint levels.
E_MALFORMED_LINT_ATTRIBUTE = "E0452"
E_FORBID_OVERRULED = "E0453"

# Exit status reported when an internal invariant breaks (malformed span).
INTERNAL_ERROR_EXIT_CODE = 101
