from candlepin_client.cli_schema import CLI_TABLE_VIEWS, Column


def test_column_prefers_flat_keys_then_nested_path():
    column = Column("Product", keys=("product_name",), path=("product", "name"))

    assert column.render({"product_name": "Server"}) == "Server"
    assert column.render({"product": {"name": "Desktop"}}) == "Desktop"
    assert column.render({"product": None}) == ""


def test_formatters():
    users = {column.header: column for column in CLI_TABLE_VIEWS["users.list"].columns}
    roles = {column.header: column for column in CLI_TABLE_VIEWS["roles.list"].columns}
    pools = {column.header: column for column in CLI_TABLE_VIEWS["pools.list"].columns}

    assert users["Super Admin"].render({"super_admin": False}) == "No"
    assert roles["Users"].render({"users": [{"username": "a"}, {"username": "b"}]}) == "2"
    assert pools["Ends"].render({"end_date": "2025-01-31T00:00:00.000+0000"}) == "2025-01-31"


def test_pool_rows_sort_by_product_name():
    view = CLI_TABLE_VIEWS["pools.list"]
    rows = [{"product_name": "zeta"}, {"product_name": "Alpha"}]

    assert [row["product_name"] for row in sorted(rows, key=view.sort_key)] == ["Alpha", "zeta"]
