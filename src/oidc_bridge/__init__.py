"""oidc-bridge: federated identity to OpenID Connect claims bridge.

Translates attributes asserted by an upstream identity provider into OIDC
claims and reconciles authenticated users against a persisted user store.
"""

__version__ = "0.1.0"
