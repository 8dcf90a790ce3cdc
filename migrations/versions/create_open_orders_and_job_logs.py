"""Create open_orders, job_logs and job_log_details tables

Revision ID: create_open_orders_and_job_logs
Revises:
Create Date: 2025-12-15 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'create_open_orders_and_job_logs'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table('open_orders',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('sold_to', sa.Integer(), nullable=True),
    sa.Column('ship_to', sa.Integer(), nullable=True),
    sa.Column('cust_name', sa.String(length=255), nullable=True),
    sa.Column('country', sa.String(length=255), nullable=True),
    sa.Column('cust_po_num', sa.String(length=255), nullable=True),
    sa.Column('sales_doc', sa.String(length=255), nullable=True),
    sa.Column('item_number', sa.Integer(), nullable=True),
    sa.Column('sales_type', sa.String(length=255), nullable=True),
    sa.Column('plant', sa.Integer(), nullable=True),
    sa.Column('so_stloc', sa.String(length=255), nullable=True),
    sa.Column('material', sa.String(length=255), nullable=True),
    sa.Column('material_description', sa.String(length=255), nullable=True),
    sa.Column('bismt', sa.String(length=255), nullable=True),
    sa.Column('order_date', sa.Date(), nullable=True),
    sa.Column('requested_date', sa.Date(), nullable=True),
    sa.Column('est_ship_date', sa.Date(), nullable=True),
    sa.Column('pl_gl_date', sa.Date(), nullable=True),
    sa.Column('action_date', sa.Date(), nullable=True),
    sa.Column('order_qty', sa.Integer(), nullable=True),
    sa.Column('order_qty_uom', sa.String(length=255), nullable=True),
    sa.Column('open_order_qty', sa.Integer(), nullable=True),
    sa.Column('open_order_qty_uom', sa.String(length=255), nullable=True),
    sa.Column('open_del_qty', sa.Integer(), nullable=True),
    sa.Column('open_del_qty_uom', sa.String(length=255), nullable=True),
    sa.Column('gi_qty', sa.Integer(), nullable=True),
    sa.Column('gi_qty_uom', sa.String(length=255), nullable=True),
    sa.Column('in_stock', sa.Integer(), nullable=True),
    sa.Column('needed_qty', sa.Integer(), nullable=True),
    sa.Column('order_shortfall', sa.Integer(), nullable=True),
    sa.Column('cumu_shortfall', sa.Integer(), nullable=True),
    sa.Column('total_shortfall', sa.Integer(), nullable=True),
    sa.Column('unrestricted_qty', sa.Integer(), nullable=True),
    sa.Column('unrestricted_qty_uom', sa.String(length=255), nullable=True),
    sa.Column('safety_stock', sa.Integer(), nullable=True),
    sa.Column('base_uom', sa.String(length=255), nullable=True),
    sa.Column('ship_type', sa.Integer(), nullable=True),
    sa.Column('ship_status', sa.String(length=255), nullable=True),
    sa.Column('ship_status_id', sa.String(length=255), nullable=True),
    sa.Column('shipping_from', sa.String(length=255), nullable=True),
    sa.Column('shipping_type', sa.String(length=255), nullable=True),
    sa.Column('delivery_number', sa.String(length=255), nullable=True),
    sa.Column('delivery_item_number', sa.Integer(), nullable=True),
    sa.Column('shipment_number', sa.String(length=255), nullable=True),
    sa.Column('order_status', sa.String(length=255), nullable=True),
    sa.Column('action_text', sa.Text(), nullable=True),
    sa.Column('action_user', sa.String(length=255), nullable=True),
    sa.Column('current_text', sa.Text(), nullable=True),
    sa.Column('csr_name', sa.String(length=255), nullable=True),
    sa.Column('csr_action_text', sa.Text(), nullable=True),
    sa.Column('csr_action_date', sa.String(length=255), nullable=True),
    sa.Column('csr_action_user', sa.String(length=255), nullable=True),
    sa.Column('sales_rep', sa.String(length=255), nullable=True),
    sa.Column('service_agent_number', sa.String(length=255), nullable=True),
    sa.Column('service_agent_name', sa.String(length=255), nullable=True),
    sa.Column('equipment', sa.String(length=255), nullable=True),
    sa.Column('i_stloc', sa.String(length=255), nullable=True),
    sa.Column('s_loc', sa.String(length=255), nullable=True),
    sa.Column('process_order_num', sa.String(length=255), nullable=True),
    sa.Column('transit_time', sa.Integer(), nullable=True),
    sa.Column('days_late', sa.Integer(), nullable=True),
    sa.Column('leadtime', sa.Integer(), nullable=True),
    sa.Column('temp_sensitive', sa.Integer(), nullable=True),
    sa.Column('ud_code', sa.String(length=255), nullable=True),
    sa.Column('fert_code', sa.String(length=255), nullable=True),
    sa.Column('fert_desc', sa.String(length=255), nullable=True),
    sa.Column('customer_note', sa.Text(), nullable=True),
    sa.Column('name1', sa.String(length=255), nullable=True),
    sa.Column('full_name', sa.String(length=255), nullable=True),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.Column('updated_at', sa.DateTime(), nullable=False),
    sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('open_orders', schema=None) as batch_op:
        batch_op.create_index('ix_open_orders_cust_name', ['cust_name'], unique=False)
        batch_op.create_index('ix_open_orders_sales_doc', ['sales_doc'], unique=False)
        batch_op.create_index('ix_open_orders_material', ['material'], unique=False)
        batch_op.create_index('ix_open_orders_order_date', ['order_date'], unique=False)
        batch_op.create_index('ix_open_orders_order_status', ['order_status'], unique=False)

    op.create_table('job_logs',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('name', sa.String(length=32), nullable=False),
    sa.Column('status', sa.String(length=20), nullable=False),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.Column('updated_at', sa.DateTime(), nullable=False),
    sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('job_logs', schema=None) as batch_op:
        batch_op.create_index('ix_job_logs_name', ['name'], unique=True)
        batch_op.create_index('ix_job_logs_status', ['status'], unique=False)
        batch_op.create_index('ix_job_logs_created_at', ['created_at'], unique=False)

    op.create_table('job_log_details',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('job_log_id', sa.Integer(), nullable=False),
    sa.Column('message', sa.Text(), nullable=False),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.ForeignKeyConstraint(['job_log_id'], ['job_logs.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('job_log_details', schema=None) as batch_op:
        batch_op.create_index('ix_job_log_details_job_log_id', ['job_log_id'], unique=False)
        batch_op.create_index('ix_job_log_details_created_at', ['created_at'], unique=False)

def downgrade():
    op.drop_table('job_log_details')
    op.drop_table('job_logs')
    op.drop_table('open_orders')
