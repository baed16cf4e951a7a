"""
Lifecycle services built on the record store
"""

from .client_roster import PERMANENT_CLIENTS_COLLECTION, ClientRoster
from .daily_stats import DAILY_STATS_COLLECTION, DailyStatsAggregator
from .facility_settings import SETTINGS_COLLECTION, FacilitySettingsHolder
from .vehicle_ledger import VEHICLES_COLLECTION, VehicleLedger

__all__ = [
    "ClientRoster",
    "DailyStatsAggregator",
    "FacilitySettingsHolder",
    "VehicleLedger",
    "DAILY_STATS_COLLECTION",
    "PERMANENT_CLIENTS_COLLECTION",
    "SETTINGS_COLLECTION",
    "VEHICLES_COLLECTION",
]
