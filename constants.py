# constants.py

# =============================================================================
# --- QUADTREE SETTINGS ---
# =============================================================================
QUADTREE_CAPACITY = 5 # Points a node stores locally before it subdivides
QUADTREE_MAX_DEPTH = 16 # Nodes at this depth keep excess points instead of subdividing
QUADTREE_TRACK_VISITED = False # Mark nodes touched by the last query (diagnostics only)
QUADTREE_QUADRANT_COUNT = 4

# =============================================================================
# --- WORLD EXTENTS ---
# =============================================================================
WORLD_WIDTH = 1000.0
WORLD_HEIGHT = 600.0

# =============================================================================
# --- POINT STORAGE ---
# =============================================================================
POINT_MANAGER_INITIAL_CAPACITY = 1024
POINT_MANAGER_GROWTH_FACTOR = 2

# =============================================================================
# --- BENCHMARK ---
# =============================================================================
BENCHMARK_POINT_COUNT = 2 ** 12
BENCHMARK_EPOCHS = 120
BENCHMARK_QUERIES_PER_EPOCH = 8
BENCHMARK_VERIFY_QUERIES = True # Cross-check every query against a linear scan
LOOKUP_RADIUS = 25.0
LOOKUP_HALF_EXTENT = 40.0
RANDOM_SEED = 12345
UI_LOG_INTERVAL_EPOCHS = 20
PROFILER_PRINT_LINE_COUNT = 20
MILLISECONDS_PER_SECOND = 1000.0

# =============================================================================
# --- GRAPHS ---
# =============================================================================
GRAPH_OUTPUT_DIR = "."
GRAPH_FIGURE_SIZE = (12, 7)
GRAPH_TIMING_FILENAME = "quadtree_timing_graph.png"
GRAPH_STRUCTURE_FILENAME = "quadtree_structure_graph.png"
GRAPH_QUERY_FILENAME = "quadtree_query_graph.png"
