"""Create the profiles table linked to Supabase auth users.

Revision ID: 20261001_create_profiles
Revises:
Create Date: 2026-10-01
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20261001_create_profiles"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "profiles",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("auth.users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("email", sa.Text(), nullable=True),
        sa.Column("full_name", sa.Text(), nullable=True),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("NOW()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("NOW()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        schema="public",
    )

    op.execute("ALTER TABLE public.profiles ENABLE ROW LEVEL SECURITY")
    op.execute('CREATE POLICY "profiles are public" ON public.profiles FOR SELECT USING (true)')
    op.execute('CREATE POLICY "insert own profile" ON public.profiles FOR INSERT WITH CHECK (auth.uid() = id)')
    op.execute('CREATE POLICY "update own profile" ON public.profiles FOR UPDATE USING (auth.uid() = id)')
    op.execute('CREATE POLICY "delete own profile" ON public.profiles FOR DELETE USING (auth.uid() = id)')


def downgrade() -> None:
    op.drop_table("profiles", schema="public")
