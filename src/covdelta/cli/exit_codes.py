# mirror <sysexits.h>
EXIT_OK = 0  # Normal success
EXIT_GENERIC = 1  # Generic failure (fallback)
EXIT_DELTA = 2  # Coverage dropped by more than the allowed delta
EXIT_DATAERR = 65  # Input data was invalid (e.g., malformed coverage summary)
EXIT_NOINPUT = 66  # Input file not found (e.g., coverage-summary.json missing)
EXIT_CONFIG = 78  # Invalid configuration (e.g., bad pyproject.toml)
