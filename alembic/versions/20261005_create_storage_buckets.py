"""Create the public avatar and media image buckets with owner-folder policies.

Revision ID: 20261005_create_storage_buckets
Revises: 20261004_add_toggle_functions
Create Date: 2026-10-05
"""
from __future__ import annotations

from alembic import op

# revision identifiers, used by Alembic.
revision = "20261005_create_storage_buckets"
down_revision = "20261004_add_toggle_functions"
branch_labels = None
depends_on = None

BUCKETS = ("avatars", "media-images")


def upgrade() -> None:
    for bucket in BUCKETS:
        op.execute(
            f"""
            INSERT INTO storage.buckets (id, name, public)
            VALUES ('{bucket}', '{bucket}', true)
            ON CONFLICT (id) DO NOTHING
            """
        )
        # Objects live under "<owner id>/..." so the first folder is the owner.
        owner_check = f"bucket_id = '{bucket}' AND (storage.foldername(name))[1] = auth.uid()::text"
        op.execute(f'CREATE POLICY "{bucket} public read" ON storage.objects FOR SELECT USING (bucket_id = \'{bucket}\')')
        op.execute(f'CREATE POLICY "{bucket} owner insert" ON storage.objects FOR INSERT WITH CHECK ({owner_check})')
        op.execute(f'CREATE POLICY "{bucket} owner update" ON storage.objects FOR UPDATE USING ({owner_check})')
        op.execute(f'CREATE POLICY "{bucket} owner delete" ON storage.objects FOR DELETE USING ({owner_check})')


def downgrade() -> None:
    for bucket in BUCKETS:
        for action in ("public read", "owner insert", "owner update", "owner delete"):
            op.execute(f'DROP POLICY IF EXISTS "{bucket} {action}" ON storage.objects')
        op.execute(f"DELETE FROM storage.buckets WHERE id = '{bucket}'")
