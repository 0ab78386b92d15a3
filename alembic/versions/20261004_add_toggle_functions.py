"""Add atomic like toggles and the self-service account deletion function.

Revision ID: 20261004_add_toggle_functions
Revises: 20261003_create_media_tables
Create Date: 2026-10-04
"""
from __future__ import annotations

from alembic import op

# revision identifiers, used by Alembic.
revision = "20261004_add_toggle_functions"
down_revision = "20261003_create_media_tables"
branch_labels = None
depends_on = None


def _toggle_function(name: str, argument: str, table: str, column: str) -> str:
    # Both branches run under a per-target transaction lock so concurrent
    # toggles from the same viewer serialize and the returned count is exact.
    return f"""
        CREATE OR REPLACE FUNCTION public.{name}({argument} uuid)
        RETURNS TABLE(liked boolean, like_count integer)
        LANGUAGE plpgsql
        SECURITY INVOKER
        SET search_path = public
        AS $$
        DECLARE
            viewer uuid := auth.uid();
        BEGIN
            IF viewer IS NULL THEN
                RAISE EXCEPTION 'authentication required' USING ERRCODE = '28000';
            END IF;

            PERFORM pg_advisory_xact_lock(hashtext('{table}' || viewer::text || {argument}::text));

            DELETE FROM public.{table} t WHERE t.user_id = viewer AND t.{column} = {argument};
            IF FOUND THEN
                liked := false;
            ELSE
                INSERT INTO public.{table} (user_id, {column}) VALUES (viewer, {argument})
                ON CONFLICT DO NOTHING;
                liked := true;
            END IF;

            SELECT count(*)::int INTO like_count FROM public.{table} t WHERE t.{column} = {argument};
            RETURN NEXT;
        END;
        $$
    """


def upgrade() -> None:
    op.execute(_toggle_function("toggle_post_like", "p_post_id", "post_likes", "post_id"))
    op.execute(_toggle_function("toggle_comment_like", "p_comment_id", "comment_likes", "comment_id"))
    op.execute(
        """
        CREATE OR REPLACE FUNCTION public.delete_user()
        RETURNS void
        LANGUAGE plpgsql
        SECURITY DEFINER
        SET search_path = public
        AS $$
        BEGIN
            IF auth.uid() IS NULL THEN
                RAISE EXCEPTION 'authentication required' USING ERRCODE = '28000';
            END IF;
            DELETE FROM auth.users WHERE id = auth.uid();
        END;
        $$
        """
    )
    op.execute("REVOKE ALL ON FUNCTION public.delete_user() FROM anon")
    op.execute("GRANT EXECUTE ON FUNCTION public.delete_user() TO authenticated")
    op.execute("GRANT EXECUTE ON FUNCTION public.toggle_post_like(uuid) TO authenticated")
    op.execute("GRANT EXECUTE ON FUNCTION public.toggle_comment_like(uuid) TO authenticated")


def downgrade() -> None:
    op.execute("DROP FUNCTION IF EXISTS public.delete_user()")
    op.execute("DROP FUNCTION IF EXISTS public.toggle_comment_like(uuid)")
    op.execute("DROP FUNCTION IF EXISTS public.toggle_post_like(uuid)")
