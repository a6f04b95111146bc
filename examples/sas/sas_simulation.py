"""Example usage of the SAS staircase with a simulated observer."""

from sas_staircase.procedures import StochasticApproximationStaircase
from sas_staircase.simulation import ObserverResponseModel, simulate_staircase
from sas_staircase.visualization import plot_staircase, print_progression


def main():
    # Configure the simulated observer
    observer = ObserverResponseModel(
        slope=-0.3,
        guess_rate=0.01,
        lapse_rate=0.01,
        threshold_probability=0.85
    )

    # Stop after 10 reversals, never issue levels outside 0-120
    staircase = StochasticApproximationStaircase(
        0.85, 30, 100,
        x_min=0,
        x_max=120,
        stop_mode='reversals',
        stop_threshold=10,
        round_steps=False
    )

    simulate_staircase(staircase, true_threshold=40, response_model=observer, random_state=42)

    # Undo the last two trials, e.g. after a lapse in attention, and carry on
    staircase.backstep(2)
    simulate_staircase(staircase, true_threshold=40, response_model=observer, random_state=7)

    print_progression(staircase)
    plot_staircase(staircase, true_threshold=40, title="Example SAS Staircase")


if __name__ == "__main__":
    main()
