from pathlib import Path

import pytest

from kcalc.config import CalcConfig
from kcalc.session import CalculatorSession

from tests.infrastructure import FixedClock, ManualScheduler


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def session(scheduler, clock) -> CalculatorSession:
    """Сессия с ручным таймером и часами; задержка восстановления по умолчанию (1500 мс)."""
    return CalculatorSession(CalcConfig(), scheduler=scheduler, clock=clock)


@pytest.fixture
def tmpproj(tmp_path: Path) -> Path:
    """Пустой рабочий каталог для CLI (без kcalc-cfg/)."""
    return tmp_path
