import copy
import enum
import logging

import torch

from attractor.network import NeuralNetwork
import attractor.utils
from .errors import DimensionMismatch, InvalidGraphStructure, NegativeChips, NoActiveVertices
from . import generate

logger = logging.getLogger(__name__)


class UpdateMode(enum.Enum):
    # Fire one active vertex per step.
    SEQUENTIAL = "sequential"
    # Fire every active vertex per step, all computed from the same pre-step configuration.
    PARALLEL = "parallel"

class SelectionStrategy(enum.Enum):
    """
    How a sequential step chooses among several active vertices.
    """
    FIRST_ACTIVE = "first_active"
    RANDOM_ACTIVE = "random_active"


class ChipFiringEngine(NeuralNetwork):
    """
    A graph where vertices hold chips that are fired to neighbors.

    Each vertex i holds configuration[i] >= 0 chips.
    A vertex is active if it holds at least as many chips as its degree.
    When a vertex fires it loses degree chips and each neighbor gains one chip per connecting edge,
    so firing never changes the total number of chips.

    The adjacency matrix counts edge multiplicity, adjacency[i][j] being the number of edges from i to j.
    It is fixed at construction, as are the degrees derived from it.

    history records the configuration after construction and after every fire, step and avalanche.
    It is never trimmed automatically; long simulations should call clear_history() periodically.
    """
    def __init__(self, adjacency, configuration):
        """
        :param adjacency: A square matrix of non-negative integer edge multiplicities.
        :param configuration: The initial number of chips at each vertex.
        """
        # Catch ragged nested lists before torch turns them into an unhelpful error.
        if isinstance(adjacency, (list, tuple)):
            for i, row in enumerate(adjacency):
                if len(row) != len(adjacency):
                    raise DimensionMismatch(f"Row {i} of adjacency matrix has length {len(row)} "
                        f"but expected {len(adjacency)}")
        raw = attractor.utils.torchize(adjacency)
        # An empty list has shape (0,), but describes the graph with no vertices.
        if raw.numel() == 0 and attractor.utils.is_vector(raw):
            raw = raw.view(0, 0)
        if not attractor.utils.is_matrix(raw) or not attractor.utils.is_square(raw):
            raise DimensionMismatch(f"Adjacency matrix must be square, got shape {tuple(raw.shape)}")
        if (raw < 0).any() or (raw != raw.round()).any():
            raise InvalidGraphStructure("Adjacency matrix entries must be non-negative integers")

        self.num_vertices = raw.shape[0]
        self._adjacency = raw.to(torch.int64)
        # Degree is the number of edge endpoints leaving a vertex, i.e. the row sum.
        self.degrees = self._adjacency.sum(dim=1)
        self.configuration = self._validate_configuration(configuration)
        self.history = [self.configuration.clone()]
        self.update_mode = UpdateMode.SEQUENTIAL
        self.selection_strategy = SelectionStrategy.FIRST_ACTIVE
        # Individual vertex firings since the last reset of the history.
        self.fire_count = 0

    ##################
    # Graph builders #
    ##################
    @classmethod
    def from_edge_list(cls, edges, num_vertices, configuration=None):
        """
        Create an undirected graph from a list of (from, to) pairs.
        Every pair adds one edge in each direction, so repeated pairs create multi-edges.

        :param edges: A list of (from, to) vertex index pairs.
        :param num_vertices: The total number of vertices in the graph.
        :param configuration: The initial number of chips at each vertex. Defaults to no chips anywhere.
        """
        if configuration is None:
            configuration = [0] * num_vertices
        elif len(configuration) != num_vertices:
            raise DimensionMismatch(f"Initial configuration has length {len(configuration)} but expected {num_vertices}")

        adjacency = torch.zeros((num_vertices, num_vertices), dtype=torch.int64)
        for (src, dst) in edges:
            if not (0 <= src < num_vertices and 0 <= dst < num_vertices):
                raise InvalidGraphStructure(f"Edge ({src}, {dst}) references vertex outside range 0..{num_vertices}")
            adjacency[src, dst] += 1
            adjacency[dst, src] += 1
        return cls(adjacency, configuration)

    @classmethod
    def new_grid(cls, width, height, configuration=None):
        """
        Create a width x height lattice where each vertex is connected to its up, down, left and right neighbors.
        Vertex (x, y) is numbered y*width + x. Corners have degree 2, edges 3, and interior vertices 4.
        """
        if width < 1 or height < 1:
            raise InvalidGraphStructure(f"Grid dimensions must be greater than 0, got {width}x{height}")
        return cls.from_edge_list(generate.grid_edges(width, height), width * height, configuration)

    @classmethod
    def new_cycle(cls, num_vertices, configuration=None):
        """
        Create a ring of num_vertices vertices, each of degree 2.
        """
        if num_vertices < 3:
            raise InvalidGraphStructure("Cycle graph needs at least 3 vertices")
        return cls.from_edge_list(generate.cycle_edges(num_vertices), num_vertices, configuration)

    @classmethod
    def new_complete(cls, num_vertices, configuration=None):
        """
        Create a graph where every vertex is connected to every other vertex.
        """
        if num_vertices < 2:
            raise InvalidGraphStructure("Complete graph needs at least 2 vertices")
        return cls.from_edge_list(generate.complete_edges(num_vertices), num_vertices, configuration)

    @classmethod
    def new_star(cls, num_vertices, configuration=None):
        """
        Create a star with vertex 0 at its center.
        """
        if num_vertices < 3:
            raise InvalidGraphStructure("Star graph needs at least 3 vertices")
        return cls.from_edge_list(generate.star_edges(num_vertices), num_vertices, configuration)

    @classmethod
    def from_graph(cls, G, configuration=None):
        """
        Create an engine from a networkx graph. Vertices are numbered in the order of G.nodes.
        Parallel edges of a multigraph are counted, edge weights are ignored.
        Edge direction is ignored as well, and a self-loop adds 2 to its vertex's degree.

        :param G: A networkx Graph or MultiGraph.
        """
        index = {node: idx for (idx, node) in enumerate(G.nodes)}
        edges = [(index[u], index[v]) for (u, v) in G.edges()]
        return cls.from_edge_list(edges, len(index), configuration)

    ###########
    # Queries #
    ###########
    @property
    def adjacency(self):
        # Hand out a copy so that degrees always match adjacency.
        return self._adjacency.clone()

    def size(self):
        return self.num_vertices

    def active_vertices(self):
        """
        Indices, in ascending order, of vertices holding at least as many chips as their degree.
        """
        return torch.nonzero(self.configuration >= self.degrees).view(-1).tolist()

    def is_stable(self):
        """
        A configuration is stable when no vertex is active.
        """
        return not bool((self.configuration >= self.degrees).any())

    def total_chips(self):
        return int(self.configuration.sum().item())

    def neighbors(self, vertex):
        """
        Distinct neighbors of vertex in ascending order, ignoring edge multiplicity.
        Out of range vertices have no neighbors.
        """
        if not 0 <= vertex < self.num_vertices:
            return []
        return torch.nonzero(self._adjacency[vertex] > 0).view(-1).tolist()

    ############
    # Dynamics #
    ############
    def _check_vertex(self, vertex):
        if not 0 <= vertex < self.num_vertices:
            raise InvalidGraphStructure(f"Vertex {vertex} is outside valid range 0..{self.num_vertices}")

    def _validate_configuration(self, configuration):
        raw = attractor.utils.torchize(configuration)
        if not attractor.utils.is_vector(raw) or raw.shape[0] != self.num_vertices:
            raise DimensionMismatch(f"Configuration has shape {tuple(raw.shape)} but expected ({self.num_vertices},)")
        if (raw != raw.round()).any():
            raise DimensionMismatch("Configuration must contain whole numbers of chips")
        for i, chips in enumerate(raw.tolist()):
            if chips < 0:
                raise NegativeChips(f"Vertex {i} has {int(chips)} chips, but negative chips are not allowed")
        return raw.to(torch.int64)

    def _fire(self, vertex):
        # The firing vertex loses one chip per outgoing edge, and each neighbor gains one chip per connecting edge.
        # A self-loop is both lost and regained.
        self.configuration[vertex] -= self.degrees[vertex]
        self.configuration += self._adjacency[vertex]
        self.fire_count += 1

    def fire_vertex(self, vertex):
        """
        Fire a specific vertex and record the resulting configuration in history.

        :param vertex: The index of the vertex to fire. It must be active.
        """
        self._check_vertex(vertex)
        if self.configuration[vertex] < self.degrees[vertex]:
            raise NoActiveVertices(f"Vertex {vertex} is not active: has {self.configuration[vertex].item()} chips "
                f"but needs at least {self.degrees[vertex].item()} to fire")
        self._fire(vertex)
        self.history.append(self.configuration.clone())

    def step(self, rng):
        """
        Perform one step of the dynamics according to update_mode, and record the result in history.

        Sequential mode fires a single active vertex chosen by selection_strategy.
        Parallel mode fires every active vertex at once; each firing is computed against the pre-step configuration
        and their deltas are summed before being applied.

        Returns the list of vertices that fired.

        :param rng: A numpy Generator owned by the caller. Only drawn from by the RANDOM_ACTIVE strategy.
        """
        active = self.active_vertices()
        if not active:
            raise NoActiveVertices("No active vertices to fire")

        if self.update_mode == UpdateMode.SEQUENTIAL:
            if self.selection_strategy == SelectionStrategy.FIRST_ACTIVE:
                vertex = active[0]
            elif self.selection_strategy == SelectionStrategy.RANDOM_ACTIVE:
                vertex = attractor.utils.random_choice(active, rng)
            else: raise NotImplementedError(f"Unknown selection strategy {self.selection_strategy}")
            self._fire(vertex)
            fired = [vertex]
        elif self.update_mode == UpdateMode.PARALLEL:
            mask = (self.configuration >= self.degrees).to(torch.int64)
            # Loss at every active vertex, gain at every neighbor of every active vertex.
            delta = (mask.unsqueeze(1) * self._adjacency).sum(dim=0) - mask * self.degrees
            next_configuration = self.configuration + delta
            if (next_configuration < 0).any():
                raise NegativeChips(f"Parallel step would produce configuration {next_configuration.tolist()}")
            self.configuration = next_configuration
            self.fire_count += len(active)
            fired = active
        else: raise NotImplementedError(f"Unknown update mode {self.update_mode}")

        logger.debug("Fired %s, configuration is now %s", fired, self.configuration.tolist())
        self.history.append(self.configuration.clone())
        return fired

    def run(self, max_steps, rng):
        """
        Step until the configuration is stable or max_steps steps have been taken.

        Returns the number of steps actually taken, which is 0 if the configuration was already stable.

        :param max_steps: Maximum number of steps to run.
        :param rng: A numpy Generator owned by the caller.
        """
        for i in range(max_steps):
            if self.is_stable():
                return i
            try:
                self.step(rng)
            # Nothing left to fire is the stable outcome we're looking for, not an error.
            except NoActiveVertices:
                return i
        return max_steps

    def drop_chip(self, vertex):
        """
        Add a chip to a vertex and record the result in history, without relaxing the graph.
        Unlike add_chip(), the trajectory so far is kept.
        """
        self._check_vertex(vertex)
        self.configuration[vertex] += 1
        self.history.append(self.configuration.clone())

    def trigger_avalanche(self, vertex, max_steps, rng):
        """
        Add a chip to a vertex and run until stable.

        Returns the number of steps taken. In sequential mode this is the number of firings;
        in parallel mode a step may fire many vertices, so consult fire_count for the number of firings.

        :param vertex: Vertex to add a chip to.
        :param max_steps: Maximum number of steps to run.
        :param rng: A numpy Generator owned by the caller.
        """
        self.drop_chip(vertex)
        steps = self.run(max_steps, rng)
        logger.info("Avalanche at vertex %d completed in %d steps", vertex, steps)
        return steps

    ###############
    # Bookkeeping #
    ###############
    def reset(self):
        """
        Restore the first configuration in history and discard the rest of the trajectory.
        """
        self.configuration = self.history[0].clone()
        self.history = [self.configuration.clone()]
        self.fire_count = 0

    def clear_history(self):
        """
        Discard the trajectory, keeping only the current configuration.
        The current configuration becomes the one reset() returns to.
        """
        self.history = [self.configuration.clone()]
        self.fire_count = 0

    def set_configuration(self, configuration):
        """
        Replace the configuration and restart history from it. Prior trajectory is discarded.

        :param configuration: The number of chips at each vertex.
        """
        self.configuration = self._validate_configuration(configuration)
        self.history = [self.configuration.clone()]
        self.fire_count = 0

    def add_chip(self, vertex):
        """
        Place one more chip on vertex, restarting history from the edited configuration.
        """
        self._check_vertex(vertex)
        configuration = self.configuration.clone()
        configuration[vertex] += 1
        self.set_configuration(configuration)

    def remove_chip(self, vertex):
        """
        Take one chip from vertex, restarting history from the edited configuration.
        Raises NegativeChips if the vertex is empty.
        """
        self._check_vertex(vertex)
        configuration = self.configuration.clone()
        configuration[vertex] -= 1
        self.set_configuration(configuration)

    #################
    # NeuralNetwork #
    #################
    def forward(self, input, rng, max_steps=100):
        """
        Run a copy of this graph from configuration input until stable, leaving this graph untouched.
        Returns the copy's history.
        """
        clone = copy.deepcopy(self)
        clone.set_configuration(input)
        clone.run(max_steps, rng)
        return clone.history

    def train(self, data):
        """
        There are no weights to learn; the first element of data becomes the configuration.
        """
        if len(data):
            self.set_configuration(data[0])
