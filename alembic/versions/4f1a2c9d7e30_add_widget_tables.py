# © [2025] EDT&Partners. Licensed under CC BY 4.0.

"""Add widget tables

Revision ID: 4f1a2c9d7e30
Revises:
Create Date: 2025-07-02 10:12:41.218530

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '4f1a2c9d7e30'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SERVER_DEFAULT_NOW = sa.func.now()

def upgrade() -> None:
    op.create_table('widgets',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('guid', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=True),
        sa.Column('start_url', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=SERVER_DEFAULT_NOW, nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_widgets_id'), 'widgets', ['id'], unique=False)
    op.create_index(op.f('ix_widgets_guid'), 'widgets', ['guid'], unique=True)

    op.create_table('widget_default_preferences',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('widget_id', sa.String(), nullable=False),
        sa.Column('preference_name', sa.String(), nullable=False),
        sa.Column('default_value', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['widget_id'], ['widgets.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('widget_id', 'preference_name', name='uq_widget_default_preference'),
    )
    op.create_index(op.f('ix_widget_default_preferences_id'), 'widget_default_preferences', ['id'], unique=False)
    op.create_index(op.f('ix_widget_default_preferences_widget_id'), 'widget_default_preferences', ['widget_id'], unique=False)

    op.create_table('widget_instances',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('id_key', sa.String(), nullable=False),
        sa.Column('api_key', sa.String(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('shared_data_key', sa.String(), nullable=False),
        sa.Column('widget_guid', sa.String(), nullable=False),
        sa.Column('lang', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=SERVER_DEFAULT_NOW, nullable=False),
        sa.ForeignKeyConstraint(['widget_guid'], ['widgets.guid'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('api_key', 'user_id', 'shared_data_key', 'widget_guid', name='uq_widget_instance_tuple'),
    )
    op.create_index(op.f('ix_widget_instances_id'), 'widget_instances', ['id'], unique=False)
    op.create_index(op.f('ix_widget_instances_id_key'), 'widget_instances', ['id_key'], unique=True)

    op.create_table('preferences',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('instance_id', sa.String(), nullable=False),
        sa.Column('dkey', sa.String(), nullable=False),
        sa.Column('dvalue', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['instance_id'], ['widget_instances.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('instance_id', 'dkey', name='uq_preference_instance_key'),
    )
    op.create_index(op.f('ix_preferences_id'), 'preferences', ['id'], unique=False)
    op.create_index(op.f('ix_preferences_instance_id'), 'preferences', ['instance_id'], unique=False)

    op.create_table('participants',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('instance_id', sa.String(), nullable=False),
        sa.Column('participant_id', sa.String(), nullable=False),
        sa.Column('display_name', sa.String(), nullable=True),
        sa.Column('thumbnail_url', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=SERVER_DEFAULT_NOW, nullable=False),
        sa.ForeignKeyConstraint(['instance_id'], ['widget_instances.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('instance_id', 'participant_id', name='uq_participant_instance'),
    )
    op.create_index(op.f('ix_participants_id'), 'participants', ['id'], unique=False)
    op.create_index(op.f('ix_participants_instance_id'), 'participants', ['instance_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_participants_instance_id'), table_name='participants')
    op.drop_index(op.f('ix_participants_id'), table_name='participants')
    op.drop_table('participants')

    op.drop_index(op.f('ix_preferences_instance_id'), table_name='preferences')
    op.drop_index(op.f('ix_preferences_id'), table_name='preferences')
    op.drop_table('preferences')

    op.drop_index(op.f('ix_widget_instances_id_key'), table_name='widget_instances')
    op.drop_index(op.f('ix_widget_instances_id'), table_name='widget_instances')
    op.drop_table('widget_instances')

    op.drop_index(op.f('ix_widget_default_preferences_widget_id'), table_name='widget_default_preferences')
    op.drop_index(op.f('ix_widget_default_preferences_id'), table_name='widget_default_preferences')
    op.drop_table('widget_default_preferences')

    op.drop_index(op.f('ix_widgets_guid'), table_name='widgets')
    op.drop_index(op.f('ix_widgets_id'), table_name='widgets')
    op.drop_table('widgets')
