from sqlalchemy import text

# Rejects any order item named "Explode", standing in for a constraint
# violation at the items-insert step
FAIL_ITEMS_TRIGGER = """
CREATE TRIGGER IF NOT EXISTS fail_order_items
BEFORE INSERT ON order_items
WHEN NEW.product_name = 'Explode'
BEGIN
    SELECT RAISE(ABORT, 'forced order_items failure');
END;
"""


def add_failure_trigger(engine):
    with engine.begin() as conn:
        conn.execute(text(FAIL_ITEMS_TRIGGER))


def count_rows(engine, table):
    with engine.connect() as conn:
        return conn.execute(text(f"SELECT COUNT(*) FROM {table}")).scalar_one()
