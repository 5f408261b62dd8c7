"""
inspection.py
~~~~~~~~~~~~~

Diagnostic views of a network: a plain text dump and a PNG chart of
weights and thresholds.
"""

import base64
import logging
from io import BytesIO

logger = logging.getLogger(__name__)


def format_network(network) -> str:
    """
    Render the network id, every layer id, and every neuron's id, weight
    and threshold as text.

    Args:
        network: The Network to describe

    Returns:
        str: Multi-line description, not meant for parsing
    """
    lines = [f"Network Name: {network.id}", "----"]
    for layer_index, layer in enumerate(network.layers, start=1):
        lines.append(f"Layer: {layer_index}")
        lines.append(f"Layer Id: {layer.id}")
        for neuron_index, neuron in enumerate(layer.neurons(), start=1):
            lines.append(f" - Neuron Id: {neuron.id}")
            lines.append(f" - Neuron: {neuron_index}")
            lines.append(f" -- Weight: {neuron.weight:f}")
            lines.append(f" -- Threshold: {neuron.threshold:f}")
    return "\n".join(lines)


def render_network_image(network) -> str:
    """
    Create a base64-encoded PNG charting each layer's weights and thresholds.

    One panel per layer, one pair of bars per neuron.

    Args:
        network: The Network to draw

    Returns:
        str: Base64-encoded PNG image
    """
    # Figure renders through its own Agg canvas; the global backend is untouched
    from matplotlib.figure import Figure

    layers = network.layers
    panels = max(len(layers), 1)

    fig = Figure(figsize=(3 * panels, 3))
    axes = fig.subplots(1, panels, squeeze=False)
    axes = axes[0]

    if not layers:
        axes[0].text(0.5, 0.5, 'empty network', ha='center', va='center')
        axes[0].axis('off')

    for ax, layer in zip(axes, layers):
        neurons = layer.neurons()
        positions = list(range(len(neurons)))
        ax.bar(
            [p - 0.2 for p in positions],
            [n.weight for n in neurons],
            width=0.4,
            label='weight'
        )
        ax.bar(
            [p + 0.2 for p in positions],
            [n.threshold for n in neurons],
            width=0.4,
            label='threshold'
        )
        ax.set_title(layer.id)
        ax.set_xticks(positions)
        ax.set_xlabel('neuron')

    if layers:
        axes[0].legend(loc='upper right', fontsize='small')
    fig.suptitle(f"Network: {network.id}")

    # Convert to base64 string
    buffer = BytesIO()
    fig.savefig(buffer, format='png', bbox_inches='tight')
    buffer.seek(0)
    img_base64 = base64.b64encode(buffer.getvalue()).decode('utf-8')

    logger.debug(f"Rendered network '{network.id}' ({len(layers)} layer(s))")
    return img_base64
