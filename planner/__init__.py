"""ScrumBot planner - owner ranking, team extraction and workload helpers."""
