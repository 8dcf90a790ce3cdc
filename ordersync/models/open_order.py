"""Local replica of the vwZSDOrder_Advanced view (plant 8800)."""

from datetime import datetime
from ordersync.extensions import db

class OpenOrder(db.Model):
    """One open sales-order line, replaced wholesale on every sync."""

    __tablename__ = 'open_orders'

    id = db.Column(db.Integer, primary_key=True)

    # Customer
    sold_to = db.Column(db.Integer)
    ship_to = db.Column(db.Integer)
    cust_name = db.Column(db.String(255), index=True)
    country = db.Column(db.String(255))
    cust_po_num = db.Column(db.String(255))

    # Order
    sales_doc = db.Column(db.String(255), index=True)
    item_number = db.Column(db.Integer)
    sales_type = db.Column(db.String(255))
    plant = db.Column(db.Integer)
    so_stloc = db.Column(db.String(255))

    # Material
    material = db.Column(db.String(255), index=True)
    material_description = db.Column(db.String(255))
    bismt = db.Column(db.String(255))

    # Dates
    order_date = db.Column(db.Date, index=True)
    requested_date = db.Column(db.Date)
    est_ship_date = db.Column(db.Date)
    pl_gl_date = db.Column(db.Date)
    action_date = db.Column(db.Date)

    # Quantities
    order_qty = db.Column(db.Integer)
    order_qty_uom = db.Column(db.String(255))
    open_order_qty = db.Column(db.Integer)
    open_order_qty_uom = db.Column(db.String(255))
    open_del_qty = db.Column(db.Integer)
    open_del_qty_uom = db.Column(db.String(255))
    gi_qty = db.Column(db.Integer)
    gi_qty_uom = db.Column(db.String(255))

    # Inventory
    in_stock = db.Column(db.Integer)
    needed_qty = db.Column(db.Integer)
    order_shortfall = db.Column(db.Integer)
    cumu_shortfall = db.Column(db.Integer)
    total_shortfall = db.Column(db.Integer)
    unrestricted_qty = db.Column(db.Integer)
    unrestricted_qty_uom = db.Column(db.String(255))
    safety_stock = db.Column(db.Integer)
    base_uom = db.Column(db.String(255))

    # Shipping
    ship_type = db.Column(db.Integer)
    ship_status = db.Column(db.String(255))
    ship_status_id = db.Column(db.String(255))
    shipping_from = db.Column(db.String(255))
    shipping_type = db.Column(db.String(255))
    delivery_number = db.Column(db.String(255))
    delivery_item_number = db.Column(db.Integer)
    shipment_number = db.Column(db.String(255))

    # Status and actions
    order_status = db.Column(db.String(255), index=True)
    action_text = db.Column(db.Text)
    action_user = db.Column(db.String(255))
    current_text = db.Column(db.Text)

    # CSR (csr_action_date arrives as free text upstream and is stored as-is)
    csr_name = db.Column(db.String(255))
    csr_action_text = db.Column(db.Text)
    csr_action_date = db.Column(db.String(255))
    csr_action_user = db.Column(db.String(255))

    # Sales and service
    sales_rep = db.Column(db.String(255))
    service_agent_number = db.Column(db.String(255))
    service_agent_name = db.Column(db.String(255))

    # Logistics
    equipment = db.Column(db.String(255))
    i_stloc = db.Column(db.String(255))
    s_loc = db.Column(db.String(255))
    process_order_num = db.Column(db.String(255))
    transit_time = db.Column(db.Integer)
    days_late = db.Column(db.Integer)
    leadtime = db.Column(db.Integer)
    temp_sensitive = db.Column(db.Integer)

    # Additional
    ud_code = db.Column(db.String(255))
    fert_code = db.Column(db.String(255))
    fert_desc = db.Column(db.String(255))
    customer_note = db.Column(db.Text)
    name1 = db.Column(db.String(255))
    full_name = db.Column(db.String(255))

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f'<OpenOrder {self.id}: {self.sales_doc}/{self.item_number}>'

    @classmethod
    def sortable_columns(cls):
        """Names of the columns a listing may be ordered by."""
        return [column.name for column in cls.__table__.columns]
