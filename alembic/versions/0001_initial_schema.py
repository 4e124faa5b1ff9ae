"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.TIMESTAMP(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    ]


def upgrade() -> None:
    # --- Catalogues ---
    op.create_table(
        'diseases',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('code', sa.String(length=20), nullable=False, comment='Code CIM-10'),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_diseases_id'), 'diseases', ['id'], unique=False)
    op.create_index(op.f('ix_diseases_code'), 'diseases', ['code'], unique=True)
    op.create_index(op.f('ix_diseases_name'), 'diseases', ['name'], unique=False)
    op.create_index(op.f('ix_diseases_category'), 'diseases', ['category'], unique=False)

    op.create_table(
        'findings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('code', sa.String(length=50), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_findings_id'), 'findings', ['id'], unique=False)
    op.create_index(op.f('ix_findings_code'), 'findings', ['code'], unique=True)
    op.create_index(op.f('ix_findings_name'), 'findings', ['name'], unique=False)
    op.create_index(op.f('ix_findings_category'), 'findings', ['category'], unique=False)

    op.create_table(
        'medications',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('generic_name', sa.String(length=255), nullable=True),
        sa.Column('dosage_form', sa.String(length=100), nullable=True, comment='Comprimé, gélule, sirop...'),
        sa.Column('strength', sa.String(length=100), nullable=True, comment='500mg, 10ml...'),
        sa.Column('manufacturer', sa.String(length=255), nullable=True),
        sa.Column('category', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_medications_id'), 'medications', ['id'], unique=False)
    op.create_index(op.f('ix_medications_name'), 'medications', ['name'], unique=False)
    op.create_index(op.f('ix_medications_generic_name'), 'medications', ['generic_name'], unique=False)

    op.create_table(
        'drugs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('barcode', sa.String(length=64), nullable=True),
        sa.Column('atc_code', sa.String(length=20), nullable=True),
        sa.Column('active_ingredient', sa.Text(), nullable=True),
        sa.Column('product_name', sa.String(length=512), nullable=True),
        sa.Column('categories', sa.Text(), nullable=False, comment='Liste JSON'),
        sa.Column('description', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_drugs_id'), 'drugs', ['id'], unique=False)
    op.create_index(op.f('ix_drugs_barcode'), 'drugs', ['barcode'], unique=True)
    op.create_index(op.f('ix_drugs_atc_code'), 'drugs', ['atc_code'], unique=False)
    op.create_index(op.f('ix_drugs_product_name'), 'drugs', ['product_name'], unique=False)

    op.create_table(
        'therapies',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.String(length=255), nullable=True),
        sa.Column('active_ingredient', sa.Text(), nullable=True),
        sa.Column('dosage_form', sa.String(length=100), nullable=True),
        sa.Column('strength', sa.String(length=100), nullable=True),
        sa.Column('manufacturer', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_therapies_id'), 'therapies', ['id'], unique=False)
    op.create_index(op.f('ix_therapies_name'), 'therapies', ['name'], unique=False)
    op.create_index(op.f('ix_therapies_category'), 'therapies', ['category'], unique=False)

    # --- Ordonnances types ---
    op.create_table(
        'prescription_templates',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_by', sa.String(length=255), nullable=True, comment='Identifiant du praticien'),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_prescription_templates_id'), 'prescription_templates', ['id'], unique=False)
    op.create_index(op.f('ix_prescription_templates_name'), 'prescription_templates', ['name'], unique=False)

    op.create_table(
        'prescription_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('prescription_template_id', sa.Integer(), nullable=False),
        sa.Column('medication_id', sa.Integer(), nullable=True),
        sa.Column('therapy_id', sa.Integer(), nullable=True),
        sa.Column('dosage', sa.String(length=255), nullable=False, comment='Ex: 1 comprimé'),
        sa.Column('frequency', sa.String(length=255), nullable=False, comment='Ex: deux fois par jour'),
        sa.Column('duration', sa.String(length=255), nullable=False, comment='Ex: 7 jours'),
        sa.Column('instructions', sa.Text(), nullable=True),
        sa.CheckConstraint(
            '(medication_id IS NOT NULL AND therapy_id IS NULL) '
            'OR (medication_id IS NULL AND therapy_id IS NOT NULL)',
            name='ck_prescription_items_single_target'
        ),
        sa.ForeignKeyConstraint(['prescription_template_id'], ['prescription_templates.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['medication_id'], ['medications.id']),
        sa.ForeignKeyConstraint(['therapy_id'], ['therapies.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_prescription_items_prescription_template_id'), 'prescription_items',
                    ['prescription_template_id'], unique=False)
    op.create_index(op.f('ix_prescription_items_medication_id'), 'prescription_items', ['medication_id'], unique=False)
    op.create_index(op.f('ix_prescription_items_therapy_id'), 'prescription_items', ['therapy_id'], unique=False)

    # --- Associations ---
    op.create_table(
        'disease_prescriptions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('disease_id', sa.Integer(), nullable=False),
        sa.Column('prescription_template_id', sa.Integer(), nullable=False),
        sa.Column('confidence_score', sa.Float(), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.ForeignKeyConstraint(['disease_id'], ['diseases.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['prescription_template_id'], ['prescription_templates.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('disease_id', 'prescription_template_id', name='uq_disease_prescription'),
    )
    op.create_index(op.f('ix_disease_prescriptions_disease_id'), 'disease_prescriptions', ['disease_id'], unique=False)
    op.create_index(op.f('ix_disease_prescriptions_prescription_template_id'), 'disease_prescriptions',
                    ['prescription_template_id'], unique=False)

    op.create_table(
        'finding_prescriptions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('finding_id', sa.Integer(), nullable=False),
        sa.Column('prescription_template_id', sa.Integer(), nullable=False),
        sa.Column('confidence_score', sa.Float(), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.ForeignKeyConstraint(['finding_id'], ['findings.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['prescription_template_id'], ['prescription_templates.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('finding_id', 'prescription_template_id', name='uq_finding_prescription'),
    )
    op.create_index(op.f('ix_finding_prescriptions_finding_id'), 'finding_prescriptions', ['finding_id'], unique=False)
    op.create_index(op.f('ix_finding_prescriptions_prescription_template_id'), 'finding_prescriptions',
                    ['prescription_template_id'], unique=False)

    # --- Suivi et configuration ---
    op.create_table(
        'search_logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('query', sa.Text(), nullable=False),
        sa.Column('search_type', sa.String(length=50), nullable=False),
        sa.Column('results_count', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_search_logs_query'), 'search_logs', ['query'], unique=False)
    op.create_index(op.f('ix_search_logs_search_type'), 'search_logs', ['search_type'], unique=False)
    op.create_index(op.f('ix_search_logs_created_at'), 'search_logs', ['created_at'], unique=False)

    app_config = op.create_table(
        'app_config',
        sa.Column('key', sa.String(length=100), nullable=False),
        sa.Column('value', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('updated_at', sa.TIMESTAMP(), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('key'),
    )
    op.bulk_insert(app_config, [
        {'key': 'ai_enabled', 'value': 'true', 'description': 'Enable AI features'},
        {'key': 'ai_provider', 'value': 'openai', 'description': 'AI provider (openai, anthropic, etc.)'},
        {'key': 'search_suggestions_enabled', 'value': 'true', 'description': 'Enable search suggestions'},
        {'key': 'auto_save_enabled', 'value': 'true', 'description': 'Enable auto-save for prescription templates'},
    ])


def downgrade() -> None:
    op.drop_table('app_config')
    op.drop_table('search_logs')
    op.drop_table('finding_prescriptions')
    op.drop_table('disease_prescriptions')
    op.drop_table('prescription_items')
    op.drop_table('prescription_templates')
    op.drop_table('therapies')
    op.drop_table('drugs')
    op.drop_table('medications')
    op.drop_table('findings')
    op.drop_table('diseases')
