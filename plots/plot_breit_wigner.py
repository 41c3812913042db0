import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

import matplotlib.pyplot as plt
import numpy as np

from phasespace import BreitWignerTransform, breit_wigner_propagator, propagator_integral
from phasespace.defaults import W_BOSON


def plot_breit_wigner(mass, width, n_samples=200000, seed=0, save_plots=False, figsize=(12, 5)):
    """
    Plot the distribution of mapped invariant masses and the mapping Jacobian.

    Parameters:
    -----------
    mass, width : float
        Propagator mass and width (GeV)
    n_samples : int
        Number of uniform samples pushed through the mapping
    seed : int
        Seed of the uniform sample generator
    save_plots : bool
        Whether to save plots to files (default: False)
    figsize : tuple
        Figure size (width, height) in inches (default: (12, 5))
    """
    transform = BreitWignerTransform(mass, width)
    rng = np.random.default_rng(seed)
    x = rng.random(n_samples)
    s, _ = transform.evaluate_batch(x)

    # Mapped samples follow |P(s)|^2 normalised over s in [0, inf)
    window = (max(0.0, mass**2 - 10 * mass * width), mass**2 + 10 * mass * width)
    s_grid = np.linspace(*window, 500)
    density = breit_wigner_propagator(s_grid, mass, width) / propagator_integral(mass, width)

    fig, axes = plt.subplots(1, 2, figsize=figsize)

    ax1 = axes[0]
    in_window = (s >= window[0]) & (s <= window[1])
    weight = np.count_nonzero(in_window) / n_samples
    ax1.hist(s[in_window], bins=100, density=True, alpha=0.6, label='mapped samples')
    ax1.plot(s_grid, density / weight, 'k-', lw=1.5, label='$|P(s)|^2$ (normalised)')
    ax1.set_xlabel('$s$ [GeV$^2$]', fontsize=12)
    ax1.set_ylabel('density', fontsize=12)
    ax1.set_title(f'Breit-Wigner samples, $m={mass}$, $\\Gamma={width}$', fontsize=14, fontweight='bold')
    ax1.legend()
    ax1.grid(True, alpha=0.3)

    ax2 = axes[1]
    x_grid = np.linspace(0.0, 0.999, 500)
    _, jac_grid = transform.evaluate_batch(x_grid)
    ax2.semilogy(x_grid, jac_grid, 'b-', lw=1.5)
    ax2.set_xlabel('$x$', fontsize=12)
    ax2.set_ylabel('$ds/dx$', fontsize=12)
    ax2.set_title('Jacobian of the mapping', fontsize=14, fontweight='bold')
    ax2.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_plots:
        output_dir = Path('plots')
        output_dir.mkdir(exist_ok=True)
        plt.savefig(output_dir / 'breit_wigner_mapping.png', dpi=300, bbox_inches='tight')
        print(f"Plot saved to {output_dir / 'breit_wigner_mapping.png'}")

    plt.show()

    return fig, axes


if __name__ == '__main__':
    plot_breit_wigner(*W_BOSON)
