from typing import Annotated

from pydantic import Field

from evm_manager.constants import MAX_UINT8, MIN_UINT8

type ValidatedUint8 = Annotated[int, Field(strict=True, ge=MIN_UINT8, le=MAX_UINT8)]
