from os import getenv

PORT: int = int(getenv("PORT", 3000))

# Listens on all interfaces unless told otherwise
HOST: str = getenv("HOST", "0.0.0.0")  # nosec: B104

LOG_REQUESTS: bool = getenv("STRATA_LOG_REQUESTS", "1") == "1"

# EOF
