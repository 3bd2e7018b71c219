from __future__ import annotations


def test_every_foreign_key_declares_on_delete() -> None:
    from stuhouses.schema import metadata

    for table in metadata.sorted_tables:
        for fk in table.foreign_keys:
            assert fk.ondelete in {"CASCADE", "SET NULL"}, f"{table.name}.{fk.parent.name}"


def test_soft_references_set_null() -> None:
    from stuhouses import schema

    def ondelete(table, column):
        (fk,) = table.c[column].foreign_keys
        return fk.ondelete

    assert ondelete(schema.properties, "city_id") == "SET NULL"
    assert ondelete(schema.properties, "nearest_university_id") == "SET NULL"
    assert ondelete(schema.properties, "agent_id") == "SET NULL"
    assert ondelete(schema.universities, "city_id") == "SET NULL"
    assert ondelete(schema.rent_payments, "payment_id") == "SET NULL"
    assert ondelete(schema.activity_logs, "user_id") == "SET NULL"


def test_owned_rows_cascade() -> None:
    from stuhouses import schema

    for table in (schema.property_images, schema.property_features, schema.property_availability):
        (fk,) = table.c.property_id.foreign_keys
        assert fk.ondelete == "CASCADE"
    for column in ("user_id", "property_id"):
        (fk,) = schema.user_shortlist.c[column].foreign_keys
        assert fk.ondelete == "CASCADE"
