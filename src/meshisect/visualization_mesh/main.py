import logging

import networkx as nx
import matplotlib.pyplot as plt


def visualize_bvh_tree_graph(graph, show=True):
    try:
        pos = nx.nx_agraph.graphviz_layout(graph, prog="dot")
    except (ImportError, OSError, ValueError):
        # нет pygraphviz или программы dot
        logging.debug("graphviz layout is not available, using spring layout")
        pos = nx.spring_layout(graph, seed=0)

    labels = nx.get_node_attributes(graph, 'label')
    colors = ["lightgreen" if leaf else "lightblue" for _, leaf in graph.nodes(data="is_leaf")]

    fig = plt.figure(figsize=(12, 8))
    nx.draw(graph, pos, labels=labels, with_labels=True, node_size=350, node_color=colors, arrows=False, font_size=6)
    plt.title("BVH Tree Structure", fontsize=12)
    if show:
        plt.show()
    return fig
