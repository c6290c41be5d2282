"""Prompt construction for forecast narration."""

from typing import List

from forecast_announcer.weather.models import DailyForecast

PROMPT_TEMPLATE = """You are an enthusiastic sports announcer providing a weather forecast for {location}.
Here is the actual weather data for the next 5 days:
{weather_data}

Give a five-day weather forecast in your energetic sports announcer style using this actual weather data.
Each day should include the provided temperature and conditions in an exciting way.
Make it engaging and fun, like you're announcing a big game!

{format_instructions}"""


def format_weather_data(forecasts: List[DailyForecast]) -> str:
    """Render daily forecasts as one prompt line per day."""
    return "\n".join(
        f"Day {i}: {day.date} - Temperature: {day.temperature}°F, Conditions: {day.description}"
        for i, day in enumerate(forecasts, start=1)
    )


class NarrationPrompt:
    """Sports announcer prompt with embedded output format instructions."""

    def __init__(self, format_instructions: str, template: str = PROMPT_TEMPLATE):
        self.format_instructions = format_instructions
        self.template = template

    def format(self, location: str, weather_data: str) -> str:
        """Substitute the location and weather lines into the template."""
        return self.template.format(
            location=location,
            weather_data=weather_data,
            format_instructions=self.format_instructions
        )
