# ctforge/services/__init__.py
from .scenario_repository import ScenarioRepository, get_scenario_repository
from .scenario_validator import ScenarioValidation, validate_scenario, validate_scenario_data

__all__ = [
    'ScenarioRepository', 'get_scenario_repository',
    'ScenarioValidation', 'validate_scenario', 'validate_scenario_data',
]
