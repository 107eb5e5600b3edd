"""Rack health sources."""

from rack_monitor.racks.base import BaseRack
from rack_monitor.racks.inventory import InventoryRack
from rack_monitor.racks.static import StaticRack

__all__ = ["BaseRack", "InventoryRack", "StaticRack"]
