"""Weather lookup tool backed by a static table of canned forecasts."""

from __future__ import annotations

from pydantic import BaseModel, Field

from toolagent.toolkit.base import BaseTool

WEATHER_TABLE: dict[str, str] = {
    "北京": "北京今天晴朗，气温15-25°C，微风",
    "上海": "上海今天多云，气温18-28°C，东南风",
    "深圳": "深圳今天阵雨，气温22-30°C，南风",
}

FALLBACK_FORECAST = "抱歉，暂时无法获取该城市的天气信息"


class WeatherArgs(BaseModel):
    city: str = Field(description="要查询天气的城市名称")


class WeatherLookup(BaseTool):
    name = "get_weather"
    description = "获取指定城市的天气信息"
    args_model = WeatherArgs

    def __init__(self, table: dict[str, str] | None = None) -> None:
        self._table = dict(WEATHER_TABLE if table is None else table)

    def call(self, args: WeatherArgs) -> str:
        return self._table.get(args.city, FALLBACK_FORECAST)
