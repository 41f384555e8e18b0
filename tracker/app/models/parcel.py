"""
Parcel database model.

One row per tracked shipment in the ``parcel`` table.
"""

from sqlalchemy import BigInteger, Column, Integer, Text
from tracker.app.db.session import Base


class Parcel(Base):
    """
    Parcel model for the tracker.
    
    Status is stored as plain text so the store accepts any value the
    caller writes; lifecycle rules belong to the service layer.
    """
    __tablename__ = "parcel"
    
    # INTEGER on SQLite keeps the rowid alias so numbers are auto-assigned
    number = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    
    # Ownership - not checked against any client registry
    client = Column(BigInteger, nullable=False, index=True)
    
    status = Column(Text, nullable=False)
    address = Column(Text, nullable=False)
    
    # RFC3339 string, written once on creation
    created_at = Column(Text, nullable=False)
    
    def __repr__(self):
        return f"<Parcel(number={self.number}, client={self.client}, status='{self.status}')>"
