"""Built-in sample tools."""

from toolagent.tools.calculator import Calculator, CalculatorArgs
from toolagent.tools.expression import evaluate_expression
from toolagent.tools.weather import FALLBACK_FORECAST, WEATHER_TABLE, WeatherArgs, WeatherLookup

__all__ = [
    "Calculator",
    "CalculatorArgs",
    "FALLBACK_FORECAST",
    "WEATHER_TABLE",
    "WeatherArgs",
    "WeatherLookup",
    "evaluate_expression",
]
