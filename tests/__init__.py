# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the $1 Startup API:
# - test_models.py: Unit tests for Pydantic model validation
# - test_application_service.py: Intake service against an in-memory Supabase
# - test_api.py: HTTP endpoints through the FastAPI test client
# - test_auth.py: JWT verification and password auth routes
# - test_websocket.py: Live stats connection manager and endpoint
#
# Run tests with: poetry run pytest
# =============================================================================
