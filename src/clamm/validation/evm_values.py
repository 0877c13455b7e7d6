from typing import Annotated

from pydantic import Field

from clamm.constants import MAX_INT256, MAX_UINT256, MIN_INT256, MIN_UINT256
from clamm.libraries.tick_math import MAX_TICK, MIN_TICK

type ValidatedInt256 = Annotated[int, Field(strict=True, ge=MIN_INT256, le=MAX_INT256)]
type ValidatedUint256 = Annotated[int, Field(strict=True, ge=MIN_UINT256, le=MAX_UINT256)]

type ValidatedTick = Annotated[int, Field(strict=True, ge=MIN_TICK, le=MAX_TICK)]
