from .topology import (
    BOARD_SIZE,
    NUM_PITS_PER_SIDE,
    TOTAL_STONES,
    Outcome,
    Player,
    opponent_store,
    opposite_pit,
    own_pits,
    own_store,
    pit_owner,
)
from .kalah import (
    Board,
    Capture,
    GameState,
    Move,
    RejectReason,
    Rejected,
    apply_move,
    create_initial_state,
    is_valid_move,
    legal_moves,
    rejection_reason,
    resolve_landing,
    settle,
    sow,
)
