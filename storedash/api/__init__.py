"""Backend API access: shared client, token handling and resource clients."""

from storedash.api.client import (
    ApiClient,
    get_api_client,
    inject_auth,
    reset_api_client,
    set_auth_token,
)
from storedash.api.envelope import ApiResponse, ensure_array, unwrap_envelope
from storedash.api.resources import (
    CustomersApi,
    InventoryApi,
    OrdersApi,
    PaymentsApi,
    ResourceClients,
    UserApi,
)
from storedash.api.tokens import (
    AuthContext,
    Authenticated,
    ResolutionFailed,
    TokenBridge,
    TokenResolution,
    Unauthenticated,
)

__all__ = [
    "ApiClient",
    "ApiResponse",
    "AuthContext",
    "Authenticated",
    "CustomersApi",
    "InventoryApi",
    "OrdersApi",
    "PaymentsApi",
    "ResolutionFailed",
    "ResourceClients",
    "TokenBridge",
    "TokenResolution",
    "Unauthenticated",
    "UserApi",
    "ensure_array",
    "get_api_client",
    "inject_auth",
    "reset_api_client",
    "set_auth_token",
    "unwrap_envelope",
]
