# graphing_manager.py

import os
import matplotlib.pyplot as plt
import logger as log
import constants as C

class GraphingManager:
    """
    Collects per-epoch statistics from an EpochManager and generates
    graphs of them after the run ends.
    """
    def __init__(self):
        self.data = {
            'epoch': [],
            'build_ms': [],
            'query_ms': [],
            'point_count': [],
            'node_count': [],
            'tree_height': [],
            'hit_count': [],
            'visited_count': []
        }
        log.log("GraphingManager initialized.")

    def record_epoch(self, epoch_manager):
        """
        Adds the latest epoch's statistics to all data series.
        Call once per epoch, after that epoch's queries have run.
        """
        em = epoch_manager
        self.data['epoch'].append(em.epoch)
        self.data['build_ms'].append(em.last_build_seconds * C.MILLISECONDS_PER_SECOND)
        self.data['query_ms'].append(em.last_query_seconds * C.MILLISECONDS_PER_SECOND)
        self.data['point_count'].append(em.point_count)
        self.data['node_count'].append(em.node_count)
        self.data['tree_height'].append(em.tree_height)
        self.data['hit_count'].append(em.last_hit_count)
        self.data['visited_count'].append(em.last_visited_count)

    def has_data(self):
        """
        Checks if any data has been collected.
        """
        return len(self.data['epoch']) > 0

    def summary(self):
        """Mean of every series, or an empty dict before the first epoch."""
        if not self.has_data():
            return {}
        return {key: sum(values) / len(values) for key, values in self.data.items() if key != 'epoch'}

    def _save(self, fig, output_dir, filename, label):
        file_path = os.path.join(output_dir, filename)
        try:
            fig.savefig(file_path)
            log.log(f"[GraphingManager] {label} graph saved to {file_path}")
            return file_path
        except OSError as e:
            log.log(f"[GraphingManager] ERROR: Could not save {label.lower()} graph. Reason: {e}")
            return None

    def generate_and_save_timing_graph(self, output_dir):
        """
        Uses matplotlib to generate a line graph of build and query times.
        """
        log.log(f"[GraphingManager] Generating timing plot with {len(self.data['epoch'])} data points...")

        fig, ax = plt.subplots(figsize=C.GRAPH_FIGURE_SIZE)
        ax.plot(self.data['epoch'], self.data['build_ms'], label='Build (ms)', color='tab:blue')
        ax.plot(self.data['epoch'], self.data['query_ms'], label='Queries (ms)', color='tab:orange')

        ax.set_title('QuadTree: Build and Query Time per Epoch')
        ax.set_xlabel('Epoch')
        ax.set_ylabel('Time (ms)')
        ax.grid(True, which='both', linestyle='--', linewidth=0.5)
        ax.legend()

        fig.tight_layout()
        return fig, self._save(fig, output_dir, C.GRAPH_TIMING_FILENAME, "Timing")

    def generate_and_save_structure_graph(self, output_dir):
        """
        Uses matplotlib to generate a graph of node count and tree height.
        """
        log.log("[GraphingManager] Generating structure plot...")

        fig, ax1 = plt.subplots(figsize=C.GRAPH_FIGURE_SIZE)
        ax1.set_title('QuadTree: Structure per Epoch')
        ax1.set_xlabel('Epoch')
        ax1.grid(True, which='both', linestyle='--', linewidth=0.5)

        # --- Node count on the left axis (ax1) ---
        ax1.set_ylabel('Nodes', color='tab:blue')
        line1, = ax1.plot(self.data['epoch'], self.data['node_count'], color='tab:blue', label='Nodes')
        ax1.tick_params(axis='y', labelcolor='tab:blue')

        # --- Height on the right axis (ax2) ---
        ax2 = ax1.twinx()
        ax2.set_ylabel('Height (levels)', color='tab:green')
        line2, = ax2.plot(self.data['epoch'], self.data['tree_height'], color='tab:green', label='Height')
        ax2.tick_params(axis='y', labelcolor='tab:green')

        ax1.legend(handles=[line1, line2], loc='upper left')

        fig.tight_layout()
        return fig, self._save(fig, output_dir, C.GRAPH_STRUCTURE_FILENAME, "Structure")

    def generate_and_save_query_graph(self, output_dir):
        """
        Uses matplotlib to generate a graph of query hits and visited nodes.
        """
        log.log("[GraphingManager] Generating query plot...")

        fig, ax = plt.subplots(figsize=C.GRAPH_FIGURE_SIZE)
        ax.plot(self.data['epoch'], self.data['hit_count'], label='Points Found', color='tab:red')
        # Visited counts are only collected when visited tracking is on.
        if any(self.data['visited_count']):
            ax.plot(self.data['epoch'], self.data['visited_count'], label='Nodes Visited', color='tab:gray')

        ax.set_title('QuadTree: Query Results per Epoch')
        ax.set_xlabel('Epoch')
        ax.set_ylabel('Count')
        ax.grid(True, which='both', linestyle='--', linewidth=0.5)
        ax.legend()

        fig.tight_layout()
        return fig, self._save(fig, output_dir, C.GRAPH_QUERY_FILENAME, "Query")

    def generate_and_save_graphs(self, output_dir=C.GRAPH_OUTPUT_DIR, show=False):
        """
        Generates and saves all graphs if data exists. Returns the saved paths.
        """
        if not self.has_data():
            log.log("[GraphingManager] No data collected, skipping plot generation.")
            return []

        results = [
            self.generate_and_save_timing_graph(output_dir),
            self.generate_and_save_structure_graph(output_dir),
            self.generate_and_save_query_graph(output_dir),
        ]

        if show:
            plt.show()
        for fig, _ in results:
            plt.close(fig)
        return [path for _, path in results if path is not None]
