"""Version information for LiveEventOps."""

# Semantic versioning: MAJOR.MINOR.PATCH
# MAJOR: Breaking changes to CLI flags or report field sets
# MINOR: New features, backward compatible
# PATCH: Bug fixes, backward compatible

__version__ = "0.3.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Version history:
# 0.3.0 - Typed provider payloads and explicit remediation timeouts
#         - az CLI JSON parsed into pydantic models before scoring
#         - Stop/start confirmation polling bounded by attempts and timeout
#         - Per-target remediation lock
#         - Fleet summary carries degraded and failed-lookup counts
# 0.2.0 - Key Vault secret management and alert webhook wiring
# 0.1.0 - Initial release
#         - VM health scoring, restart remediation, fleet health check
