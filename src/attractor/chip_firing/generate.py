import networkx as nx
import torch


def grid_edges(width, height):
    """
    Edges of a width x height lattice with 4-connectivity (up, down, left, right), without wrap-around.
    Vertex (x, y) is numbered y*width + x.
    """
    G = nx.grid_2d_graph(height, width)
    # grid_2d_graph labels nodes (row, column).
    return [(y1 * width + x1, y2 * width + x2) for ((y1, x1), (y2, x2)) in G.edges()]

def cycle_edges(num_vertices):
    """
    Edges of a ring 0-1-...-(n-1)-0.
    """
    return list(nx.cycle_graph(num_vertices).edges())

def complete_edges(num_vertices):
    """
    Edges between every pair of distinct vertices.
    """
    return list(nx.complete_graph(num_vertices).edges())

def star_edges(num_vertices):
    """
    Edges from the center, vertex 0, to every other vertex.
    """
    # star_graph(n) has n+1 nodes: the center plus n leaves.
    return list(nx.star_graph(num_vertices - 1).edges())

def random_configuration(degrees, rng):
    """
    Create a random chip configuration suitable for a graph with the given degrees.

    For every vertex a fair coin is flipped. On heads the vertex receives a uniform number of chips in [0, degree],
    which may or may not make it active. On tails it receives exactly its degree, making it active.

    :param degrees: A 1-d tensor or list of vertex degrees.
    :param rng: A numpy Generator owned by the caller. Two draws are consumed per vertex on heads, one on tails.
    """
    chips = []
    for degree in torch.as_tensor(degrees).tolist():
        if rng.random() < .5:
            # RNG excludes hi endpoint.
            chips.append(int(rng.integers(0, degree + 1)))
        else:
            chips.append(int(degree))
    return torch.tensor(chips, dtype=torch.int64)
