"""Create media posts, comments, likes and tags plus their stats views.

Revision ID: 20261003_create_media_tables
Revises: 20261002_create_characters
Create Date: 2026-10-03
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20261003_create_media_tables"
down_revision = "20261002_create_characters"
branch_labels = None
depends_on = None


def _uuid_pk() -> sa.Column:
    return sa.Column("id", postgresql.UUID(as_uuid=True), server_default=sa.text("gen_random_uuid()"), nullable=False)


def _owner() -> sa.Column:
    return sa.Column(
        "user_id",
        postgresql.UUID(as_uuid=True),
        sa.ForeignKey("public.profiles.id", ondelete="CASCADE"),
        nullable=False,
    )


def _created_at() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("NOW()"), nullable=False)


def _enable_rls(table: str) -> None:
    op.execute(f"ALTER TABLE public.{table} ENABLE ROW LEVEL SECURITY")
    op.execute(f'CREATE POLICY "{table} are public" ON public.{table} FOR SELECT USING (true)')


def upgrade() -> None:
    op.create_table(
        "media_posts",
        _uuid_pk(),
        _owner(),
        sa.Column("image_url", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), server_default="", nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("char_length(description) <= 500", name="ck_media_posts_description_length"),
        schema="public",
    )
    op.create_index("ix_media_posts_created_at", "media_posts", ["created_at"], schema="public")

    op.create_table(
        "comments",
        _uuid_pk(),
        sa.Column(
            "post_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("public.media_posts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _owner(),
        sa.Column("content", sa.Text(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("char_length(content) BETWEEN 1 AND 500", name="ck_comments_content_length"),
        schema="public",
    )
    op.create_index("ix_comments_post_id", "comments", ["post_id"], schema="public")

    op.create_table(
        "post_likes",
        _owner(),
        sa.Column(
            "post_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("public.media_posts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _created_at(),
        sa.PrimaryKeyConstraint("user_id", "post_id", name="pk_post_likes"),
        schema="public",
    )

    op.create_table(
        "comment_likes",
        _owner(),
        sa.Column(
            "comment_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("public.comments.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _created_at(),
        sa.PrimaryKeyConstraint("user_id", "comment_id", name="pk_comment_likes"),
        schema="public",
    )

    op.create_table(
        "post_tags",
        _uuid_pk(),
        sa.Column(
            "post_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("public.media_posts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "character_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("public.characters.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("character_name", sa.Text(), nullable=False),
        sa.Column("position_x", sa.Float(), server_default=sa.text("0.5"), nullable=False),
        sa.Column("position_y", sa.Float(), server_default=sa.text("0.5"), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("position_x BETWEEN 0 AND 1", name="ck_post_tags_position_x"),
        sa.CheckConstraint("position_y BETWEEN 0 AND 1", name="ck_post_tags_position_y"),
        schema="public",
    )
    op.create_index("ix_post_tags_post_id", "post_tags", ["post_id"], schema="public")

    for table in ("media_posts", "comments", "post_likes", "comment_likes", "post_tags"):
        _enable_rls(table)
    op.execute('CREATE POLICY "insert own posts" ON public.media_posts FOR INSERT WITH CHECK (auth.uid() = user_id)')
    op.execute('CREATE POLICY "delete own posts" ON public.media_posts FOR DELETE USING (auth.uid() = user_id)')
    op.execute('CREATE POLICY "insert own comments" ON public.comments FOR INSERT WITH CHECK (auth.uid() = user_id)')
    op.execute('CREATE POLICY "delete own comments" ON public.comments FOR DELETE USING (auth.uid() = user_id)')
    op.execute('CREATE POLICY "insert own post likes" ON public.post_likes FOR INSERT WITH CHECK (auth.uid() = user_id)')
    op.execute('CREATE POLICY "delete own post likes" ON public.post_likes FOR DELETE USING (auth.uid() = user_id)')
    op.execute('CREATE POLICY "insert own comment likes" ON public.comment_likes FOR INSERT WITH CHECK (auth.uid() = user_id)')
    op.execute('CREATE POLICY "delete own comment likes" ON public.comment_likes FOR DELETE USING (auth.uid() = user_id)')
    op.execute(
        """
        CREATE POLICY "tag own posts" ON public.post_tags FOR INSERT
        WITH CHECK (EXISTS (SELECT 1 FROM public.media_posts p WHERE p.id = post_id AND p.user_id = auth.uid()))
        """
    )
    op.execute(
        """
        CREATE POLICY "untag own posts" ON public.post_tags FOR DELETE
        USING (EXISTS (SELECT 1 FROM public.media_posts p WHERE p.id = post_id AND p.user_id = auth.uid()))
        """
    )

    op.execute(
        """
        CREATE OR REPLACE VIEW public.media_posts_with_stats WITH (security_invoker = true) AS
        SELECT
            p.id,
            p.user_id,
            p.image_url,
            p.description,
            p.created_at,
            pr.full_name AS author_name,
            pr.avatar_url AS author_avatar,
            (SELECT count(*) FROM public.post_likes l WHERE l.post_id = p.id)::int AS like_count,
            (SELECT count(*) FROM public.comments c WHERE c.post_id = p.id)::int AS comment_count
        FROM public.media_posts p
        LEFT JOIN public.profiles pr ON pr.id = p.user_id
        """
    )
    op.execute(
        """
        CREATE OR REPLACE VIEW public.comments_with_stats WITH (security_invoker = true) AS
        SELECT
            c.id,
            c.post_id,
            c.user_id,
            c.content,
            c.created_at,
            pr.full_name AS author_name,
            pr.avatar_url AS author_avatar,
            (SELECT count(*) FROM public.comment_likes l WHERE l.comment_id = c.id)::int AS like_count
        FROM public.comments c
        LEFT JOIN public.profiles pr ON pr.id = c.user_id
        """
    )


def downgrade() -> None:
    op.execute("DROP VIEW IF EXISTS public.comments_with_stats")
    op.execute("DROP VIEW IF EXISTS public.media_posts_with_stats")
    op.drop_index("ix_post_tags_post_id", table_name="post_tags", schema="public")
    op.drop_table("post_tags", schema="public")
    op.drop_table("comment_likes", schema="public")
    op.drop_table("post_likes", schema="public")
    op.drop_index("ix_comments_post_id", table_name="comments", schema="public")
    op.drop_table("comments", schema="public")
    op.drop_index("ix_media_posts_created_at", table_name="media_posts", schema="public")
    op.drop_table("media_posts", schema="public")
