from forecast_chart.schemas.api_v1 import ChartStateResponse
from forecast_chart.definitions.chart import ChartStatus
from forecast_chart.services.forecast_pipeline import SearchOutcome
from forecast_chart.services.session_store import ForecastSession
from forecast_chart.services.status_service import VISIBILITY


class ChartStateCRUD:

    @staticmethod
    def transform_internal(session: ForecastSession) -> ChartStateResponse:
        """
        Transform the current state of a page session to API format.

        Chart data is only attached while the chart container is shown.
        """
        status = session.status
        response = ChartStateResponse(
            status=status.status,
            message=status.state.message,
            visibility=status.visibility,
        )

        instance = session.renderer.current
        result = session.pipeline.last_result
        if status.status == ChartStatus.SUCCESS and instance is not None and result is not None:
            response.location = result.location
            response.labels = result.labels
            response.values = result.values
            response.chart = instance.to_json()

        return response

    @staticmethod
    def transform_outcome(outcome: SearchOutcome, session: ForecastSession) -> ChartStateResponse:
        """
        Transform the outcome of one search to API format.

        The response always describes the search that produced it, never a
        later one. A superseded search carries its own data but no chart,
        since it was never rendered.
        """
        response = ChartStateResponse(
            status=outcome.status,
            message=outcome.message,
            visibility=dict(VISIBILITY[outcome.status]),
            superseded=outcome.superseded,
        )

        if outcome.result is not None:
            response.location = outcome.result.location
            response.labels = outcome.result.labels
            response.values = outcome.result.values

        instance = session.renderer.current
        if outcome.status == ChartStatus.SUCCESS and not outcome.superseded and instance is not None:
            response.chart = instance.to_json()

        return response
