"""add post_stats and user_stats views

Revision ID: 20261018_0002
Revises: 20261018_0001
Create Date: 2026-10-18 00:10:00

"""

from __future__ import annotations

from alembic import op

# revision identifiers, used by Alembic.
revision = "20261018_0002"
down_revision = "20261018_0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.execute(
        """
        CREATE VIEW post_stats AS
        SELECT
            p.id AS post_id,
            p.user_id,
            p.image_url,
            p.caption,
            p.created_at,
            p.updated_at,
            (SELECT COUNT(*) FROM likes l WHERE l.post_id = p.id)::int AS likes_count,
            (SELECT COUNT(*) FROM comments c WHERE c.post_id = p.id)::int AS comments_count
        FROM posts p
        """
    )
    op.execute(
        """
        CREATE VIEW user_stats AS
        SELECT
            u.id AS user_id,
            u.external_id,
            u.name,
            (SELECT COUNT(*) FROM posts p WHERE p.user_id = u.id)::int AS posts_count,
            (SELECT COUNT(*) FROM follows f WHERE f.following_id = u.id)::int AS followers_count,
            (SELECT COUNT(*) FROM follows f WHERE f.follower_id = u.id)::int AS following_count
        FROM users u
        """
    )


def downgrade() -> None:
    op.execute("DROP VIEW IF EXISTS user_stats")
    op.execute("DROP VIEW IF EXISTS post_stats")
