"""
Inventory catalog.

Models:
- InventoryItem (name-keyed price list consumed by recipe costing)
"""
