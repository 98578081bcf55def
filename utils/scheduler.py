"""
Llamadas diferidas cancelables sobre el event loop de asyncio.
"""
import asyncio
import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class ScheduledCall:
    """Ejecuta `action()` una sola vez tras `delay` segundos, salvo que se cancele"""

    def __init__(
        self,
        delay: float,
        action: Callable[[], Awaitable[None]],
        name: Optional[str] = None
    ):
        self.delay = max(0.0, delay)
        self.name = name or getattr(action, "__name__", "scheduled_call")
        self._action = action
        self._task = asyncio.get_running_loop().create_task(self._run(), name=self.name)

    async def _run(self) -> None:
        await asyncio.sleep(self.delay)
        try:
            await self._action()
        except Exception:
            logger.exception(f"Scheduled call '{self.name}' failed")

    def cancel(self) -> None:
        """Cancela la llamada si aún no ha terminado"""
        if not self._task.done():
            self._task.cancel()

    def add_done_callback(self, callback: Callable[["ScheduledCall"], None]) -> None:
        self._task.add_done_callback(lambda _task: callback(self))

    @property
    def cancelled(self) -> bool:
        return self._task.cancelled()

    @property
    def done(self) -> bool:
        return self._task.done()

    async def wait(self) -> None:
        """Espera a que la llamada termine o sea cancelada (útil en tests)"""
        try:
            await self._task
        except asyncio.CancelledError:
            pass

