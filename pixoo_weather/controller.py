import asyncio
import logging

from pixoo_weather.render.weather_view import build_weather_page

LOGGER = logging.getLogger("pixoo_weather")


class TaskScope:
    """Tracks tasks launched on behalf of one screen so they can be cancelled together."""

    def __init__(self):
        self._tasks = set()
        self.closed = False

    def launch(self, coro) -> asyncio.Task:
        if self.closed:
            coro.close()
            raise RuntimeError("Cannot launch a task in a closed scope.")
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    @property
    def active_tasks(self) -> int:
        return len(self._tasks)

    def cancel_all(self) -> None:
        self.closed = True
        for task in list(self._tasks):
            task.cancel()

    async def join(self) -> None:
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


class WeatherScreenController:
    def __init__(self, store, renderer, scope=None):
        self.store = store
        self.renderer = renderer
        self.scope = scope or TaskScope()
        self.input_text = ""
        self._unsubscribe = None

    def start(self) -> None:
        self._unsubscribe = self.store.subscribe(self._on_state)
        self.render()

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.scope.cancel_all()
        LOGGER.info("Weather screen closed.")

    def current_tree(self):
        return build_weather_page(self.input_text, self.store.observe())

    def render(self) -> None:
        try:
            self.renderer.render(self.current_tree())
        except Exception:
            LOGGER.exception("Failed to render weather screen.")

    def _on_state(self, _state) -> None:
        self.render()

    def update_input(self, text: str) -> None:
        self.input_text = text
        self.render()

    def submit(self) -> asyncio.Task:
        if self.scope.closed:
            raise RuntimeError("Weather screen is closed.")
        LOGGER.info("Searching weather for %r.", self.input_text)
        return self.scope.launch(self.store.fetch(self.input_text))

    def on_search_action(self) -> asyncio.Task:
        """Keyboard "search" action on the city field."""
        return self.submit()

    def on_search_click(self) -> asyncio.Task:
        """Search icon button."""
        return self.submit()
