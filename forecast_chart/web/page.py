"""
The single HTML page: city input, search button, and the chart surface.
"""

from string import Template

from forecast_chart.config import get_settings
from forecast_chart.definitions.chart import CLICK_TRIGGER, ENTER_KEY

settings = get_settings()

PLOTLY_JS_URL = "https://cdn.plot.ly/plotly-2.35.2.min.js"

PAGE_TEMPLATE = Template("""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>$title</title>
  <script src="$plotly_js"></script>
  <style>
    body { font-family: system-ui, sans-serif; max-width: 960px; margin: 2rem auto; padding: 0 1rem; color: #1f2937; }
    .search { display: flex; gap: .5rem; margin-bottom: 1rem; }
    .search input { flex: 1; padding: .5rem; font-size: 1rem; }
    .search button { padding: .5rem 1rem; font-size: 1rem; cursor: pointer; }
    #chartContainer { position: relative; height: 420px; }
    #$canvas_id { width: 100%; height: 100%; }
    #errorContainer { color: #b91c1c; }
    .hidden { display: none; }
  </style>
</head>
<body>
  <h1>$title</h1>
  <div class="search">
    <input id="cityInput" type="text" placeholder="City name" autocomplete="off">
    <button id="searchBtn" type="button">Search</button>
  </div>
  <div id="loadingContainer" class="hidden">Loading forecast...</div>
  <div id="errorContainer" class="hidden"><p id="errorMessage"></p></div>
  <div id="chartContainer" class="hidden"><div id="$canvas_id"></div></div>
  <script>
    const cityInput = document.getElementById('cityInput');
    const searchBtn = document.getElementById('searchBtn');
    const containers = {
      loading: document.getElementById('loadingContainer'),
      chart: document.getElementById('chartContainer'),
      error: document.getElementById('errorContainer'),
    };
    const errorMessage = document.getElementById('errorMessage');
    const surface = document.getElementById('$canvas_id');
    const sessionId = (window.crypto && crypto.randomUUID)
      ? crypto.randomUUID()
      : Math.random().toString(36).slice(2) + Date.now().toString(36);
    let latestRequest = 0;

    function applyState(state) {
      for (const [name, shown] of Object.entries(state.visibility)) {
        containers[name].classList.toggle('hidden', !shown);
      }
      errorMessage.textContent = state.message || '';
      if (state.chart) {
        Plotly.react(surface, state.chart.data, state.chart.layout, {responsive: true});
      }
    }

    async function search(trigger) {
      if (!cityInput.value.trim()) return;
      const request = ++latestRequest;
      applyState({visibility: {loading: true, chart: false, error: false}});
      try {
        const response = await fetch('/v1/search', {
          method: 'POST',
          headers: {'Content-Type': 'application/json', 'X-Session-ID': sessionId},
          body: JSON.stringify({city: cityInput.value, trigger: trigger}),
        });
        if (!response.ok) throw new Error();
        const state = await response.json();
        if (request === latestRequest && !state.superseded) applyState(state);
      } catch (e) {
        if (request === latestRequest) applyState({visibility: {loading: false, chart: false, error: true}, message: '$default_error'});
      }
    }

    searchBtn.addEventListener('click', () => search('$click'));
    cityInput.addEventListener('keypress', (e) => {
      if (e.key === '$enter') search(e.key);
    });
  </script>
</body>
</html>
""")


def render_page() -> str:
    return PAGE_TEMPLATE.substitute(
        title=settings.app_name,
        plotly_js=PLOTLY_JS_URL,
        canvas_id=settings.canvas_id,
        default_error=settings.default_error_message.replace("'", "\\'"),
        click=CLICK_TRIGGER,
        enter=ENTER_KEY,
    )
