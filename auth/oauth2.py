from fastapi.security import APIKeyHeader, HTTPBearer

# auto_error is off so the resolvers decide between the bearer token and
# the X-User-Id fallback; both schemes still show up in the OpenAPI docs.
bearer_scheme = HTTPBearer(auto_error=False, description="JWT returned by POST /api/auth/login")

identity_header_scheme = APIKeyHeader(
    name="X-User-Id",
    auto_error=False,
    description="Compatibility fallback: raw user id, trusted without proof",
)
