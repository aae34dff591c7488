"""Moving a quote between pricing schemes: dry-run checks, data rewrite and rollback."""

from .compatibility import CompatibilityReport, validate_scheme_compatibility
from .converters import (
    calculate_total_sqft_from_areas,
    convert_areas_to_flat_rate_items,
    convert_flat_rate_items_to_areas,
)
from .migrate import MigrationResult, migrate_quote_data, migration_registry
from .requirements import SCHEME_REQUIREMENTS
from .rollback import RestoredQuote, RollbackSnapshot, create_rollback_data, rollback_quote_data

__all__ = [
    "CompatibilityReport",
    "MigrationResult",
    "RestoredQuote",
    "RollbackSnapshot",
    "SCHEME_REQUIREMENTS",
    "calculate_total_sqft_from_areas",
    "convert_areas_to_flat_rate_items",
    "convert_flat_rate_items_to_areas",
    "create_rollback_data",
    "migrate_quote_data",
    "migration_registry",
    "rollback_quote_data",
]
