"""Visualization functions for staircase runs."""

import numpy as np
import matplotlib.pyplot as plt


def plot_staircase(staircase, true_threshold=None, title="SAS Staircase", ax=None, show=True):
    """
    Plot the issued levels of a staircase run.

    Positive responses are drawn as filled markers, negative ones as open
    markers, and reversal trials are circled.

    Returns:
        matplotlib.axes.Axes: The axes the trajectory was drawn on.
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(10, 6))

    levels = staircase.issued_values
    responses = staircase.responses
    reversals = staircase.reversals.astype(bool)
    n_done = len(responses)
    trials = np.arange(1, len(levels) + 1)

    ax.plot(trials, levels, color='0.6', linestyle='-', zorder=1)
    done_trials = trials[:n_done]
    done_levels = levels[:n_done]
    yes = responses == 1
    ax.scatter(done_trials[yes], done_levels[yes], color='b', marker='o', label='Positive', zorder=2)
    ax.scatter(done_trials[~yes], done_levels[~yes], facecolors='none', edgecolors='b',
               marker='o', label='Negative', zorder=2)
    if reversals.any():
        ax.scatter(done_trials[reversals], done_levels[reversals], s=160, facecolors='none',
                   edgecolors='r', label='Reversal', zorder=3)
    if true_threshold is not None:
        ax.axhline(y=true_threshold, color='k', linestyle='--', label='True threshold')

    ax.set_xlabel('Trial')
    ax.set_ylabel('Stimulus Level')
    ax.set_title(title)
    ax.grid(True)
    ax.legend()
    if show:
        plt.show()
    return ax


def print_progression(staircase):
    """Print the trial-by-trial progression of a staircase."""
    print("\nStaircase progression:")
    print("Trial |   Level  | Response | Reversal")
    print("-" * 40)
    for trial, level, response, reversal in staircase.progression:
        print(f"{trial:5d} | {level:8.2f} | {response:^8d} | {'*' if reversal else ''}")
