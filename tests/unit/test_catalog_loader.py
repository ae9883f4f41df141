"""
Unit tests -- catalog loader: YAML parsing and look-ups.
"""
from src.governance.catalog_loader import (
    DatasetCatalog,
    FieldDef,
    load_catalog,
    load_catalog_from,
)


def test_loads_without_error():
    catalog = load_catalog()
    assert isinstance(catalog, DatasetCatalog)
    assert catalog.version == 1


def test_table_and_vocabulary():
    catalog = load_catalog()
    assert catalog.table_name == "sales"
    assert catalog.products == ("Laptop", "Phone", "Tablet")
    assert catalog.regions == ("North", "South", "East", "West")
    assert catalog.preview_rows == 5


def test_keywords_lower_cased():
    catalog = load_catalog()
    assert catalog.product_keywords() == ["laptop", "phone", "tablet"]
    assert catalog.region_keywords() == ["north", "south", "east", "west"]


def test_fields():
    catalog = load_catalog()
    assert catalog.field_names() == ["id", "product", "region", "amount", "date"]
    assert all(isinstance(f, FieldDef) for f in catalog.fields)


def test_cached():
    assert load_catalog() is load_catalog()


def test_custom_file(tmp_path):
    path = tmp_path / "catalog.yml"
    path.write_text(
        "table:\n"
        "  name: orders\n"
        "vocabulary:\n"
        "  products: [Widget]\n"
        "  regions: [Mars]\n"
    )
    catalog = load_catalog_from(path)
    assert catalog.table_name == "orders"
    assert catalog.products == ("Widget",)
    assert catalog.preview_rows == 5
    assert catalog.fields == ()
