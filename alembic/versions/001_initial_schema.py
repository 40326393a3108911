"""Initial schema - plan, company, user_role.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "plan",
        sa.Column("id", sa.UUID(), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("features", JSONB(), nullable=False, server_default=sa.text("'{}'::jsonb")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "company",
        sa.Column("id", sa.UUID(), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("plan_id", sa.UUID(), sa.ForeignKey("plan.id", ondelete="SET NULL"), nullable=True),
        # Feature toggles embedded in the company settings, used when no plan is linked.
        sa.Column("settings_features", JSONB(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_company_plan_id", "company", ["plan_id"])

    op.create_table(
        "user_role",
        sa.Column("id", sa.UUID(), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("role", sa.String(50), nullable=False),
        sa.Column("role_type", sa.String(20), nullable=False),
        sa.Column("company_id", sa.UUID(), sa.ForeignKey("company.id", ondelete="CASCADE"), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("created_by", sa.String(255), nullable=True),
        sa.CheckConstraint(
            "role IN ('super_admin', 'admin_empresa', 'manager', 'employee', 'viewer')",
            name="ck_user_role_role",
        ),
        sa.CheckConstraint(
            "(role_type = 'global' AND role = 'super_admin' AND company_id IS NULL) OR "
            "(role_type = 'company' AND role <> 'super_admin' AND company_id IS NOT NULL)",
            name="ck_user_role_scope",
        ),
    )
    op.create_index("ix_user_role_user_id", "user_role", ["user_id"])
    op.create_index(
        "ix_user_role_user_company",
        "user_role",
        ["user_id", "company_id"],
        unique=True,
        postgresql_where=sa.text("is_active AND company_id IS NOT NULL"),
    )


def downgrade() -> None:
    op.drop_table("user_role")
    op.drop_table("company")
    op.drop_table("plan")
