from gamestore.db.database import get_session, init_db
from gamestore.db.operations import (
    add_cart_item,
    cart_to_model,
    clear_cart,
    count_customers,
    count_games,
    create_customer,
    create_game,
    customer_exists_by_email,
    customer_to_model,
    delete_customer,
    delete_game,
    game_exists_by_name,
    game_to_model,
    get_cart_items,
    get_customer,
    get_customer_by_email,
    get_game,
    get_game_by_name,
    get_games_by_ids,
    list_customers,
    list_games,
    remove_cart_item,
    save_customer,
    update_game,
)

__all__ = [
    "add_cart_item",
    "cart_to_model",
    "clear_cart",
    "count_customers",
    "count_games",
    "create_customer",
    "create_game",
    "customer_exists_by_email",
    "customer_to_model",
    "delete_customer",
    "delete_game",
    "game_exists_by_name",
    "game_to_model",
    "get_cart_items",
    "get_customer",
    "get_customer_by_email",
    "get_game",
    "get_game_by_name",
    "get_games_by_ids",
    "get_session",
    "init_db",
    "list_customers",
    "list_games",
    "remove_cart_item",
    "save_customer",
    "update_game",
]
