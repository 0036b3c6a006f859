from pydantic import BaseModel, ConfigDict, Field, model_validator

class EngineConfig(BaseModel):
    """Board geometry, evaluation weights and search depth.

    Frozen so a single instance can be shared by every board copy the
    search creates.
    """
    model_config = ConfigDict(frozen=True)

    board_size: int = 8
    disk_multiplier: int = 1
    move_multiplier: int = 100
    corner_multiplier: int = 1000
    search_depth: int = Field(default=5, ge=0)
    endgame_threshold: int = Field(default=40, ge=0)

    @model_validator(mode="after")
    def check_geometry(self) -> 'EngineConfig':
        if self.board_size < 4 or self.board_size % 2:
            raise ValueError(f"board_size must be even and >= 4, got {self.board_size}")
        if self.endgame_threshold > self.board_size * self.board_size:
            raise ValueError("endgame_threshold cannot exceed the number of cells")
        return self

DEFAULT_CONFIG = EngineConfig()
