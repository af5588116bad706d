"""Text, rule and Graphviz exports of fitted trees.

These helpers only read ``decision``, ``prediction``, ``true_child`` and
``false_child`` from the nodes; nothing in the fitting code depends on them.

Example rendering::

    x[0] <= 28.5 ?
    ├─ True: 683
    └─ False: x[1] == 'red' ?
       ├─ True: 2493
       └─ False: 842
"""
from __future__ import annotations

import sys
from typing import List, Optional

from .exceptions import EmptyModelError


def _format_prediction(value) -> str:
    if isinstance(value, float):
        return f"{value:.6g}"
    return str(value)

def _subtree_lines(node, is_true_child: bool, indentation: str, fn=None) -> list:
    lines = []
    # (node, is_true_child, indentation); false pushed first so true prints first
    stack = [(node, is_true_child, indentation)]
    while stack:
        node, is_true, indent = stack.pop()
        prefix = indent + ("├─ True:" if is_true else "└─ False:")
        if node is None:
            lines.append(f"{prefix} <None>\n")
            continue
        if node.is_leaf:
            lines.append(f"{prefix} {_format_prediction(node.prediction)}\n")
            continue
        lines.append(f"{prefix} {node.decision.describe(fn)} ?\n")
        indent += "│  " if is_true else "   "
        stack.append((node.false_child, False, indent))
        stack.append((node.true_child, True, indent))
    return lines

def node_to_string(node, feature_names=None) -> str:
    """Render the subtree below ``node`` as if it were the root."""
    if node.is_leaf:
        return f"Prediction: {_format_prediction(node.prediction)}\n"
    lines = [f"{node.decision.describe(feature_names)} ?\n"]
    lines += _subtree_lines(node.true_child, True, "", feature_names)
    lines += _subtree_lines(node.false_child, False, "", feature_names)
    return "".join(lines)

def tree_to_string(tree, print_parameters: bool = True, feature_names=None) -> str:
    """
    Return a boxed-branch text rendering of a tree.

    Parameters
    ----------
    tree : DecisionTreeClassifier or DecisionTreeRegressor
        Fitted or unfitted tree.
    print_parameters : bool, default=True
        Prepend a ``Name(max_depth=...)`` header line.
    feature_names : list[str], optional
        Names used instead of ``x[i]`` in decisions.
    """
    name = type(tree).__name__
    if tree.root is None:
        return f"{name}(max_depth={tree.max_depth}, root=None)\n"
    result = f"{name}(max_depth={tree.max_depth})\n" if print_parameters else ""
    return result + node_to_string(tree.root, feature_names)

def print_tree(tree, file=None, feature_names=None) -> None:
    """Write :func:`tree_to_string` (without the header) to ``file`` or stdout."""
    out = file if file is not None else sys.stdout
    out.write(tree_to_string(tree, print_parameters=False, feature_names=feature_names))


# -----------------------------------------------------------------------------
# Rules / Graphviz
# -----------------------------------------------------------------------------
def _require_fitted(tree, op: str):
    if tree.root is None:
        raise EmptyModelError(f"{op}: estimator not fitted. Call fit(...) first.")

def _collect_rules(root, fn=None) -> List[str]:
    rules: List[str] = []
    stack = [(root, [])]
    while stack:
        node, parts = stack.pop()
        if node.is_leaf:
            body = " AND ".join(parts) if parts else "<root>"
            rules.append(f"{body} => {_format_prediction(node.prediction)}")
            continue
        cond = node.decision.describe(fn)
        stack.append((node.false_child, parts + [f"NOT {cond}"]))
        stack.append((node.true_child, parts + [cond]))
    return rules

def export_rules(tree, feature_names: Optional[List[str]] = None) -> List[str]:
    """
    Export every root-to-leaf path as a rule string.

    Each rule has the form ``"<cond> AND <cond> => <prediction>"``; conditions
    on a false branch are prefixed with ``NOT``.  A tree that is a single leaf
    yields ``["<root> => <prediction>"]``.

    Raises
    ------
    EmptyModelError
        If the tree has not been fitted.
    """
    _require_fitted(tree, "export_rules")
    return _collect_rules(tree.root, feature_names)

def _add_graph_nodes(dot, root, fn=None):
    stack = [(root, "0")]
    next_id = 1
    while stack:
        node, name = stack.pop()
        if node.is_leaf:
            dot.node(name, f"{_format_prediction(node.prediction)}\nN={node.n_samples}",
                     shape="box", style="filled", color="lightgrey")
            continue
        dot.node(name, f"{node.decision.describe(fn)}\nN={node.n_samples}",
                 shape="ellipse", style="filled", color="lightblue")
        t_id, f_id = str(next_id), str(next_id + 1)
        next_id += 2
        dot.edge(name, t_id, label="True")
        dot.edge(name, f_id, label="False")
        stack.append((node.false_child, f_id))
        stack.append((node.true_child, t_id))

def export_graphviz(tree, filename: str | None = None, *, feature_names=None,
                    format: str = "dot") -> str:
    """
    Export the tree structure with the ``graphviz`` package.

    Parameters
    ----------
    filename : str or None, default=None
        Basename of the output file.  If None the DOT source is returned and
        nothing is written.
    feature_names : list[str], optional
        Names used instead of ``x[i]`` in decisions.
    format : str, default="dot"
        ``'dot'`` writes the DOT source without calling the Graphviz binary;
        other formats (``'png'``, ``'svg'``, ...) are rendered with it.

    Returns
    -------
    str
        DOT source when ``filename`` is None, otherwise the written path.

    Raises
    ------
    EmptyModelError
        If the tree has not been fitted.
    RuntimeError
        If the ``graphviz`` package is not installed.
    """
    _require_fitted(tree, "export_graphviz")
    try:
        import graphviz
    except ImportError as e:
        raise RuntimeError("Graphviz is required for export_graphviz but not installed.") from e
    dot = graphviz.Digraph(comment=type(tree).__name__, format=format)
    _add_graph_nodes(dot, tree.root, feature_names)
    if filename is None:
        return dot.source
    if format.lower() == "dot":
        path = f"{filename}.dot"
        dot.save(path)
        return path
    return dot.render(filename, cleanup=True)
