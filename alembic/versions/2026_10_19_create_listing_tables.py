from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "2026_10_19_create_listing_tables"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(20)),
        sa.Column("role", sa.Enum("user", "admin", name="userrole"), nullable=False, server_default="user"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "properties",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("price", sa.Float, nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("district", sa.String(50), nullable=False),
        sa.Column("property_type", sa.String(20), nullable=False),
        sa.Column("category", sa.String(20), nullable=False),
        sa.Column("bedrooms", sa.Integer),
        sa.Column("bathrooms", sa.Integer),
        sa.Column("area", sa.Float, nullable=False),
        sa.Column("area_unit", sa.String(10), nullable=False),
        sa.Column("amenities", postgresql.JSONB, nullable=False, server_default="[]"),
        sa.Column("images", postgresql.JSONB, nullable=False, server_default="[]"),
        sa.Column("featured", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column(
            "status",
            sa.Enum("available", "sold", "rented", name="propertystatus"),
            nullable=False,
            server_default="available",
        ),
        sa.Column("created_by_id", sa.Uuid, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_properties_location_district", "properties", ["location", "district"])
    op.create_index("ix_properties_type_category", "properties", ["property_type", "category"])
    op.create_index("ix_properties_price", "properties", ["price"])
    op.create_index("ix_properties_featured", "properties", ["featured"])

    op.create_table(
        "saved_properties",
        sa.Column("user_id", sa.Uuid, sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("property_id", sa.Uuid, sa.ForeignKey("properties.id", ondelete="CASCADE"), primary_key=True),
    )

    op.create_table(
        "saved_searches",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.Uuid, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(100)),
        sa.Column("district", sa.String(50)),
        sa.Column("property_type", sa.String(20)),
        sa.Column("category", sa.String(20)),
        sa.Column("min_price", sa.Float),
        sa.Column("max_price", sa.Float),
        sa.Column("bedrooms", sa.Integer),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_saved_searches_user_id", "saved_searches", ["user_id"])

def downgrade():
    op.drop_table("saved_searches")
    op.drop_table("saved_properties")
    op.drop_table("properties")
    op.drop_index("ix_users_email", "users")
    op.drop_table("users")
    op.execute("DROP TYPE IF EXISTS propertystatus")
    op.execute("DROP TYPE IF EXISTS userrole")
