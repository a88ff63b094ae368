from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision = "5d1e7a9c3b20"
down_revision = None
branch_labels = None
depends_on = None


def _table_exists(bind, table_name: str) -> bool:
    insp = sa.inspect(bind)
    return table_name in insp.get_table_names()


def _uuid(name: str, *args, **kwargs) -> sa.Column:
    return sa.Column(name, postgresql.UUID(as_uuid=True), *args, **kwargs)


def upgrade() -> None:
    bind = op.get_bind()

    if not _table_exists(bind, "accounts"):
        op.create_table(
            "accounts",
            _uuid("id", primary_key=True, nullable=False),
            sa.Column("email", sa.String(length=255), nullable=False, unique=True),
            sa.Column("hashed_password", sa.String(length=255), nullable=False),
            sa.Column("role", sa.String(length=20), nullable=False, server_default="business"),
            sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.text("now()"), nullable=True),
        )

    if not _table_exists(bind, "auth_sessions"):
        op.create_table(
            "auth_sessions",
            _uuid("id", primary_key=True, nullable=False),
            sa.Column("role", sa.String(length=20), nullable=False),
            _uuid("account_id", sa.ForeignKey("accounts.id"), nullable=True),
            sa.Column("phone", sa.String(length=30), nullable=True),
            sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.text("now()"), nullable=True),
            sa.Column("expires_at", sa.TIMESTAMP(), nullable=False),
            sa.Column("revoked_at", sa.TIMESTAMP(), nullable=True),
        )

    if not _table_exists(bind, "businesses"):
        op.create_table(
            "businesses",
            _uuid("id", primary_key=True, nullable=False),
            _uuid("user_id", sa.ForeignKey("accounts.id"), nullable=True),
            sa.Column("business_name", sa.String(length=255), nullable=False),
            sa.Column("business_type", sa.String(length=100), nullable=True),
            sa.Column("phone", sa.String(length=30), nullable=True),
            sa.Column("address", sa.String(length=255), nullable=True),
            sa.Column("reward_description", sa.String(length=255), nullable=True),
            sa.Column("visits_required_for_reward", sa.Integer(), nullable=True),
            sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.text("now()"), nullable=True),
            sa.Column("updated_at", sa.TIMESTAMP(), server_default=sa.text("now()"), nullable=True),
        )

    if not _table_exists(bind, "customers"):
        op.create_table(
            "customers",
            _uuid("id", primary_key=True, nullable=False),
            sa.Column("phone", sa.String(length=30), nullable=False),
            sa.Column("name", sa.String(length=255), nullable=True),
            sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.text("now()"), nullable=True),
            sa.UniqueConstraint("phone", name="uq_customers_phone"),
        )

    if not _table_exists(bind, "reviews"):
        op.create_table(
            "reviews",
            _uuid("id", primary_key=True, nullable=False),
            _uuid("business_id", sa.ForeignKey("businesses.id"), nullable=True),
            _uuid("customer_id", sa.ForeignKey("customers.id"), nullable=True),
            sa.Column("rating", sa.Integer(), nullable=True),
            sa.Column("comment", sa.String(), nullable=True),
            sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.text("now()"), nullable=True),
            sa.CheckConstraint("rating IS NULL OR (rating >= 1 AND rating <= 5)", name="ck_reviews_rating_range"),
        )

    if not _table_exists(bind, "visits"):
        op.create_table(
            "visits",
            _uuid("id", primary_key=True, nullable=False),
            _uuid("business_id", sa.ForeignKey("businesses.id"), nullable=True),
            _uuid("customer_id", sa.ForeignKey("customers.id"), nullable=True),
            sa.Column("visit_date", sa.TIMESTAMP(), server_default=sa.text("now()"), nullable=True),
            sa.Column("notes", sa.String(), nullable=True),
        )

    if not _table_exists(bind, "rewards"):
        op.create_table(
            "rewards",
            _uuid("id", primary_key=True, nullable=False),
            _uuid("business_id", sa.ForeignKey("businesses.id"), nullable=True),
            _uuid("customer_id", sa.ForeignKey("customers.id"), nullable=True),
            sa.Column("earned_date", sa.TIMESTAMP(), server_default=sa.text("now()"), nullable=True),
            sa.Column("is_redeemed", sa.Boolean(), server_default=sa.false(), nullable=True),
            sa.Column("redeemed_date", sa.TIMESTAMP(), nullable=True),
        )


def downgrade() -> None:
    bind = op.get_bind()

    for table_name in ("rewards", "visits", "reviews", "customers", "businesses", "auth_sessions", "accounts"):
        if _table_exists(bind, table_name):
            op.drop_table(table_name)
