from storefront.schemas.cart import CartItem


def find_package(item: CartItem, package_id: str):
    return next((pkg for pkg in item.packages if pkg.id == package_id), None)


def get_item_price(item: CartItem) -> float:
    """Preço efetivo: o do pacote selecionado, se existir entre os pacotes, senão o preço base."""
    selected = find_package(item, item.selected_package)
    return selected.price if selected else item.price


def calculate_item_total(item: CartItem) -> float:
    return get_item_price(item) * item.quantity
