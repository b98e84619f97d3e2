from .schemas import TeamAverageStats, Match, PoolThresholds
from .models import (
    TeamContribution,
    AllianceProjection,
    MatchForecast,
    MatchEvaluation,
    AccuracySummary,
)
from .prediction import (
    index_stats,
    climb_level_points,
    project_alliance,
    predict_alliance_score,
    estimate_win_probability,
    forecast_match,
)
from .accuracy import (
    evaluate_match,
    upcoming_forecasts,
    accuracy_feed,
    summarize_accuracy,
)
from .pool import filter_pool, filter_pool_for_state, search_teams, team_leaderboard
from .picklist import (
    PickListError,
    ListName,
    PickListState,
    PickListStore,
    add_to_list,
    remove_from_list,
    reorder_within_list,
    move_between_lists,
    toggle_picked,
    apply_operation,
)
from .storage import MemoryStore, JsonFileStore, remember_competition, resolve_active_competition
from .team_profile import radar_values
from .data_loader import load_team_stats, load_matches

__all__ = [
    # Records
    'TeamAverageStats',
    'Match',
    'PoolThresholds',
    # Results
    'TeamContribution',
    'AllianceProjection',
    'MatchForecast',
    'MatchEvaluation',
    'AccuracySummary',
    # Prediction
    'index_stats',
    'climb_level_points',
    'project_alliance',
    'predict_alliance_score',
    'estimate_win_probability',
    'forecast_match',
    # Accuracy
    'evaluate_match',
    'upcoming_forecasts',
    'accuracy_feed',
    'summarize_accuracy',
    # Draft pool
    'filter_pool',
    'filter_pool_for_state',
    'search_teams',
    'team_leaderboard',
    # Pick lists
    'PickListError',
    'ListName',
    'PickListState',
    'PickListStore',
    'add_to_list',
    'remove_from_list',
    'reorder_within_list',
    'move_between_lists',
    'toggle_picked',
    'apply_operation',
    # Storage
    'MemoryStore',
    'JsonFileStore',
    'remember_competition',
    'resolve_active_competition',
    # Team detail
    'radar_values',
    # Data loading
    'load_team_stats',
    'load_matches',
]
