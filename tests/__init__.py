# Showcase Test Suite
#
# This package contains:
# - Unit tests for page/component objects and helpers (pytest, fakes, httpx.MockTransport)
# - API scenarios (pytest + httpx)
# - UI scenarios (Playwright)
#
# Run with: python -m tests.run [smoke|unit|api|ui|visual|a11y|all]
