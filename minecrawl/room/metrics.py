from typing import Dict


def init_metrics() -> Dict[str, int | float]:
    return {
        'chunks_placed': 0,
        'chunks_reverted': 0,
        'chunks_rejected_safe_zone': 0,
        'wall_cells': 0,
        'wall_budget': 0,
        'bombs_rolled_back': 0,
        'void_bombs': 0,
        'bombs_repaired': 0,
        'bombs_underfill': 0,
        'enemies_underfill': 0,
        'coins_underfill': 0,
        'runtime_ms': 0.0,
    }
