"""Clients for the warranty and replacement services."""

from rack_monitor.clients.base import BaseReplacementClient, BaseWarrantyClient
from rack_monitor.clients.replacement import DryRunReplacementClient, HttpReplacementClient
from rack_monitor.clients.warranty import HttpWarrantyClient

__all__ = [
    "BaseReplacementClient",
    "BaseWarrantyClient",
    "DryRunReplacementClient",
    "HttpReplacementClient",
    "HttpWarrantyClient",
]
