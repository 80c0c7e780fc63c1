from bs4 import BeautifulSoup

from locatortree.models import LocatorOptions
from locatortree.registry import LocatorRegistry
from locatortree.selector_functions import SelectorFunctions

_PAGE = """
<main data-testid="shop">
  <ul data-testid="shop-list">
    <li data-testid="shop-list-item" data-test-sku="abc-123-red">Red</li>
    <li data-testid="shop-list-item" data-test-sku="abc-456-blue">Blue</li>
    <li data-testid="shop-list-item" data-test-sku="xyz-789-red">Other</li>
  </ul>
  <button data-testid="shop-checkout" data-test-state="ready">Pay</button>
</main>
<aside data-testid="shop-checkout" data-test-state="hidden"></aside>
"""


def _texts(css: str) -> list[str]:
    soup = BeautifulSoup(_PAGE, "html.parser")
    return [element.get_text(strip=True) for element in soup.select(css)]


def test_wildcard_selectors_match_rendered_attributes() -> None:
    shop = SelectorFunctions().create_locator_in_tests("shop")

    assert _texts(shop.list.item({"sku": "abc*"}).css) == ["Red", "Blue"]
    assert _texts(shop.list.item({"sku": "*red"}).css) == ["Red", "Other"]
    assert _texts(shop.list.item({"sku": "abc*red"}).css) == ["Red"]
    assert _texts(shop.list.item({"sku": "*-4*"}).css) == ["Blue"]
    assert _texts(shop.list.item({"sku": "*"}).css) == ["Red", "Blue", "Other"]


def test_combined_selectors_match_rendered_elements() -> None:
    functions = SelectorFunctions()
    shop = functions.create_locator_in_tests("shop")

    red_or_blue = functions.find_any_of_selectors(
        shop.list.item({"sku": "abc-123-red"}),
        shop.list.item({"sku": "abc-456-blue"}),
    )
    assert _texts(red_or_blue.css) == ["Red", "Blue"]

    button = functions.find_chain_of_selectors(shop(), shop.checkout())
    assert _texts(button.css) == ["Pay"]


def test_registry_attributes_round_trip_through_html() -> None:
    registry = LocatorRegistry(production=False)
    shop = registry.register("shop", {"checkout": None})
    registry.activate(LocatorOptions())

    attributes = shop.checkout({"state": "ready"})
    rendered = "<button " + " ".join(f'{name}="{value}"' for name, value in attributes.items()) + ">Pay</button>"
    soup = BeautifulSoup(rendered, "html.parser")

    assert soup.select(shop.checkout.to_css({"state": "rea*"}))[0].get_text() == "Pay"
