"""
Command handlers for the search input and button.
"""

from typing import Optional

from forecast_chart.definitions.chart import CLICK_TRIGGER, ENTER_KEY
from forecast_chart.services.forecast_pipeline import ForecastPipeline, SearchOutcome


class SearchControls:
    """
    The city input and its two triggers.

    A button click and the Enter key run the same search with the current
    input value; any other key does nothing. Each handler returns the
    outcome of the search it ran, or None when no search ran.
    """

    def __init__(self, pipeline: ForecastPipeline):
        self.pipeline = pipeline
        self.value = ""

    def set_input(self, value: str):
        self.value = value or ""

    async def click(self) -> Optional[SearchOutcome]:
        return await self.pipeline.search(self.value)

    async def key_press(self, key: str) -> Optional[SearchOutcome]:
        if key == ENTER_KEY:
            return await self.pipeline.search(self.value)
        return None

    async def trigger(self, trigger: str) -> Optional[SearchOutcome]:
        if trigger == CLICK_TRIGGER:
            return await self.click()
        return await self.key_press(trigger)
