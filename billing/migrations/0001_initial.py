from django.db import migrations


POSTGRES_DDL = [
    """
    CREATE TABLE IF NOT EXISTS customers (
        id TEXT PRIMARY KEY DEFAULT gen_random_uuid()::text,
        name VARCHAR(255) NOT NULL,
        email VARCHAR(255) NOT NULL,
        address TEXT NOT NULL,
        image_url VARCHAR(255) NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS invoices (
        id TEXT PRIMARY KEY DEFAULT gen_random_uuid()::text,
        customer_id TEXT NOT NULL REFERENCES customers(id),
        amount INTEGER NOT NULL,
        status VARCHAR(255) NOT NULL,
        date DATE NOT NULL
    )
    """,
]

SQLITE_DDL = [
    """
    CREATE TABLE IF NOT EXISTS customers (
        id TEXT PRIMARY KEY DEFAULT (lower(hex(randomblob(16)))),
        name VARCHAR(255) NOT NULL,
        email VARCHAR(255) NOT NULL,
        address TEXT NOT NULL,
        image_url VARCHAR(255) NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS invoices (
        id TEXT PRIMARY KEY DEFAULT (lower(hex(randomblob(16)))),
        customer_id TEXT NOT NULL REFERENCES customers(id),
        amount INTEGER NOT NULL,
        status VARCHAR(255) NOT NULL,
        date TEXT NOT NULL
    )
    """,
]


def create_tables(apps, schema_editor):
    statements = POSTGRES_DDL if schema_editor.connection.vendor == "postgresql" else SQLITE_DDL
    for statement in statements:
        schema_editor.execute(statement)


def drop_tables(apps, schema_editor):
    schema_editor.execute("DROP TABLE IF EXISTS invoices")
    schema_editor.execute("DROP TABLE IF EXISTS customers")


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.RunPython(create_tables, drop_tables),
    ]
