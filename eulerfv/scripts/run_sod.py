"""
Run Sod's shock tube with visualization and comparison to the exact solution.

Demonstrates:
1. Time-accurate run to a fixed final time
2. High-order reconstruction with an approximate Riemann solver
3. Comparison to the exact Riemann solution
4. Optional resolution study

    python -m eulerfv.scripts.run_sod --reconstruction WENO7 --flux HLLC -n 200
"""

import argparse
import logging
import sys

import matplotlib.pyplot as plt
import numpy as np

from eulerfv import FlowState, GasProperties, Mesh1D, Solver1D, SolverConfig
from eulerfv.tests.exact_riemann import sod_exact


def run_sod(n_cells, config, gas):
    """Run the Sod problem and return the solver and the exact solution at t_final."""
    mesh = Mesh1D.uniform(0.0, 1.0, n_cells)
    solver = Solver1D(mesh, gas, config)

    x = solver.mesh.x_cells
    rho = np.where(x < 0.5, 1.0, 0.125)
    p = np.where(x < 0.5, 1.0, 0.1)
    solver.set_initial_condition(FlowState.from_primitives(rho, np.zeros_like(x), p, gas))
    solver.solve()

    return solver, sod_exact(x, solver.time, gas.gamma)


def plot_results(solver, exact, fname):
    """Density, velocity, pressure and internal energy against the exact solution."""
    state = solver.get_state()
    x = solver.mesh.x_cells

    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    fig.suptitle(f'Sod Shock Tube ({solver.scheme_label()}): t = {solver.time:.3f}',
                 fontsize=14, fontweight='bold')

    panels = [
        (axes[0, 0], state.rho, exact['rho'], 'Density'),
        (axes[0, 1], state.u, exact['u'], 'Velocity'),
        (axes[1, 0], state.p, exact['p'], 'Pressure'),
        (axes[1, 1], state.e, exact['e'], 'Specific Internal Energy'),
    ]
    for ax, numerical, reference, title in panels:
        ax.plot(x, numerical, 'b.-', linewidth=1, markersize=3, label='Numerical')
        ax.plot(x, reference, 'r--', linewidth=2, label='Exact')
        ax.axvline(x=0.5, color='gray', linestyle=':', alpha=0.5)
        ax.set_xlabel('x')
        ax.set_title(title)
        ax.legend()
        ax.grid(True, alpha=0.3)
        ax.set_xlim([0, 1])

    plt.tight_layout()
    plt.savefig(fname, dpi=150, bbox_inches='tight')
    print(f"Saved plot to: {fname}")
    return fig


def resolution_study(config, gas, resolutions=(50, 100, 200, 400)):
    """L1 density and pressure errors for a sequence of grids."""
    errors = {'n_cells': [], 'rho_L1': [], 'p_L1': []}

    for n_cells in resolutions:
        solver, exact = run_sod(n_cells, config, gas)
        state = solver.get_state()
        errors['n_cells'].append(n_cells)
        errors['rho_L1'].append(np.mean(np.abs(state.rho - exact['rho'])))
        errors['p_L1'].append(np.mean(np.abs(state.p - exact['p'])))

    dx = 1.0 / np.array(errors['n_cells'])

    fig, ax = plt.subplots(figsize=(7, 5))
    ax.loglog(dx, errors['rho_L1'], 'b-o', linewidth=2, label='Density L1')
    ax.loglog(dx, errors['p_L1'], 'g-s', linewidth=2, label='Pressure L1')
    ax.loglog(dx, errors['rho_L1'][0] * dx / dx[0], 'k--', alpha=0.5, label='1st order')
    ax.set_xlabel('Grid spacing dx')
    ax.set_ylabel('L1 error')
    ax.set_title('Convergence Study')
    ax.legend()
    ax.grid(True, alpha=0.3)
    ax.invert_xaxis()

    plt.tight_layout()
    plt.savefig('sod_convergence.png', dpi=150, bbox_inches='tight')

    print(f"\n{'N cells':<10} {'rho L1':<14} {'p L1':<14}")
    print("-" * 40)
    for n, e_rho, e_p in zip(errors['n_cells'], errors['rho_L1'], errors['p_L1']):
        print(f"{n:<10} {e_rho:<14.6e} {e_p:<14.6e}")

    return errors


def main(args):
    logger = logging.getLogger('eulerfv')
    if args.verbose:
        logger.setLevel(logging.INFO)
        ch = logging.StreamHandler(stream=sys.stdout)
        ch.setLevel(logging.INFO)
    elif args.very_verbose:
        logger.setLevel(logging.DEBUG)
        ch = logging.StreamHandler(stream=sys.stdout)
        ch.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.WARNING)
        ch = logging.StreamHandler(stream=sys.stderr)
        ch.setLevel(logging.WARNING)
    ch.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    logger.addHandler(ch)

    gas = GasProperties(gamma=args.gamma)
    config = SolverConfig(cfl=args.cfl, t_final=args.t_final,
                          reconstruction=args.reconstruction, flux=args.flux,
                          time_scheme=args.time_scheme)

    solver, exact = run_sod(args.n_cells, config, gas)
    state = solver.get_state()
    print(f"{solver.scheme_label()}: {solver.iteration} steps to t = {solver.time:.4f}")
    print(f"  rho L1 error = {np.mean(np.abs(state.rho - exact['rho'])):.6e}")
    print(f"  p   L1 error = {np.mean(np.abs(state.p - exact['p'])):.6e}")

    plot_results(solver, exact, args.output)
    if args.study:
        resolution_study(config, gas)

    if not args.no_display:
        plt.show()


if __name__ == "__main__":
    parser = argparse.ArgumentParser("Run Sod's shock tube and compare with the exact solution.")
    parser.add_argument("-n", "--n-cells", type=int, default=200, help="number of interior cells")
    parser.add_argument("-r", "--reconstruction", default="WENO5",
                        help="WENO5, WENO7, POLY5, POLY7 or MUSCL")
    parser.add_argument("-f", "--flux", default="HLLC", help="HLLE, HLLC, ROE, LF, RUS or AUSM")
    parser.add_argument("--time-scheme", default="ssprk3", help="ssprk3, ssprk2 or euler")
    parser.add_argument("--cfl", type=float, default=0.55, help="CFL number")
    parser.add_argument("--t-final", type=float, default=0.2, help="final time")
    parser.add_argument("--gamma", type=float, default=1.4, help="ratio of specific heats")
    parser.add_argument("-o", "--output", default="sod_results.png", help="plot file name")
    parser.add_argument("--study", action="store_true", help="run a resolution study")
    parser.add_argument("--no-display", action="store_true", help="do not open plot windows")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable verbose output")
    parser.add_argument("-vv", "--very-verbose", action="store_true", help="enable very verbose output")

    main(parser.parse_args())
