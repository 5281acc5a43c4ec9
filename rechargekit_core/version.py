"""
rechargekit_core.version
------------------------
Keeps track of the RechargeKit package version.

Farmers and water managers will not care much here, but it helps keep
reports and saved submissions traceable when others install or upgrade it.
"""

# Semantic Versioning: MAJOR.MINOR.PATCH
#   - MAJOR: formula changes (results no longer comparable)
#   - MINOR: new features
#   - PATCH: small fixes
__version__ = "1.0.0"
