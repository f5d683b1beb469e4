# app/db/schema.py

from sqlalchemy import (
    MetaData, Table, Column, String, Boolean, Text, JSON, ForeignKey
)

metadata = MetaData()

suppliers = Table(
    "suppliers",
    metadata,
    Column("id", String, primary_key=True),
    Column("name", String, nullable=False),
    Column("iban", String, nullable=False, default=""),
    Column("email", String, nullable=False, default=""),
    Column("phone", String, nullable=False, default=""),
    Column("notes", Text, nullable=False, default=""),
    Column("is_merchandise", Boolean, nullable=False, default=False),
)

invoices = Table(
    "invoices",
    metadata,
    Column("id", String, primary_key=True),
    Column(
        "supplier_id",
        String,
        ForeignKey("suppliers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("creation_date", String, nullable=False),
    # Ordered ledger rows; the first one is the registration's header
    Column("rows", JSON, nullable=False),
)
