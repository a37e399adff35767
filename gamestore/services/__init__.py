"""
GameStore services.

Business logic for the catalog, accounts, carts and purchases.
Import from the submodules directly, e.g.
`from gamestore.services.purchase_service import purchase_game`.
"""
