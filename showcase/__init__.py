# Playwright Showcase
#
# Reusable pieces behind the example scenarios:
# - Page Objects and Component Objects (pages/, components/)
# - SOLID examples (solid/)
# - REST / GraphQL clients, route interception, visual snapshots,
#   axe-core audits and browser-context helpers

__version__ = "1.0.0"
