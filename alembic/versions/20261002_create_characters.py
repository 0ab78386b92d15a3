"""Create the characters table with the subclass list and the 9-per-owner cap.

Revision ID: 20261002_create_characters
Revises: 20261001_create_profiles
Create Date: 2026-10-02
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20261002_create_characters"
down_revision = "20261001_create_profiles"
branch_labels = None
depends_on = None

SUBCLASSES = ("Barbaro", "Brujo", "Caballero", "Cazador", "Conjurador", "Tirador")
MAX_CHARACTERS = 9


def upgrade() -> None:
    allowed = ", ".join(f"'{name}'" for name in SUBCLASSES)
    op.create_table(
        "characters",
        sa.Column("id", postgresql.UUID(as_uuid=True), server_default=sa.text("gen_random_uuid()"), nullable=False),
        sa.Column(
            "user_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("public.profiles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("subclass", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("NOW()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("NOW()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(f"subclass IN ({allowed})", name="ck_characters_subclass"),
        sa.CheckConstraint("char_length(name) BETWEEN 2 AND 50", name="ck_characters_name_length"),
        schema="public",
    )
    op.create_index("ix_characters_user_id", "characters", ["user_id"], schema="public")

    op.execute(
        f"""
        CREATE OR REPLACE FUNCTION public.enforce_character_limit()
        RETURNS trigger
        LANGUAGE plpgsql
        AS $$
        BEGIN
            IF (SELECT count(*) FROM public.characters WHERE user_id = NEW.user_id) >= {MAX_CHARACTERS} THEN
                RAISE EXCEPTION 'character limit reached' USING ERRCODE = 'check_violation';
            END IF;
            RETURN NEW;
        END;
        $$
        """
    )
    op.execute(
        """
        CREATE TRIGGER characters_limit_per_owner
        BEFORE INSERT ON public.characters
        FOR EACH ROW EXECUTE FUNCTION public.enforce_character_limit()
        """
    )

    op.execute("ALTER TABLE public.characters ENABLE ROW LEVEL SECURITY")
    op.execute('CREATE POLICY "characters are public" ON public.characters FOR SELECT USING (true)')
    op.execute('CREATE POLICY "insert own characters" ON public.characters FOR INSERT WITH CHECK (auth.uid() = user_id)')
    op.execute('CREATE POLICY "update own characters" ON public.characters FOR UPDATE USING (auth.uid() = user_id)')
    op.execute('CREATE POLICY "delete own characters" ON public.characters FOR DELETE USING (auth.uid() = user_id)')


def downgrade() -> None:
    op.execute("DROP TRIGGER IF EXISTS characters_limit_per_owner ON public.characters")
    op.execute("DROP FUNCTION IF EXISTS public.enforce_character_limit()")
    op.drop_index("ix_characters_user_id", table_name="characters", schema="public")
    op.drop_table("characters", schema="public")
