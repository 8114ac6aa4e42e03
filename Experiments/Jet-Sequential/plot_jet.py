"""
Jet Flow Visualization
======================

Loads the saved sequential and parallel runs and plots their diagnostics and
the final speed field of the interpolated playback.
"""

# %%
# Setup and Load Data
# -------------------

from recording import FrameRecorder
from utils import get_project_root, FramePlotter

project_root = get_project_root()
data_dir = project_root / "data"
fig_dir = project_root / "figures" / "Jet"
fig_dir.mkdir(parents=True, exist_ok=True)

recorder = FrameRecorder(256, 256)
frames = recorder.read(data_dir / "Jet-Sequential" / "jet_sequential.frames")

plotter = FramePlotter(
    frames=frames,
    runs=[
        {"h5_path": data_dir / "Jet-Sequential" / "jet_sequential.h5", "label": "sequential"},
        {"h5_path": data_dir / "Jet-Parallel" / "jet_parallel.h5", "label": "parallel"},
    ],
)

# %%
# Diagnostics
# -----------
# Interior divergence after projection and kinetic energy per step.

plotter.plot_diagnostics("divergence", output_path=fig_dir / "jet_divergence.pdf")
plotter.plot_diagnostics("kinetic_energy", output_path=fig_dir / "jet_energy.pdf")
plotter.plot_diagnostics("pressure_residual", output_path=fig_dir / "jet_residual.pdf")
print("  ✓ Diagnostics plots saved")

# %%
# Speed Field
# -----------

plotter.plot_speed(index=-1, output_path=fig_dir / "jet_speed.pdf")
print("  ✓ Speed field plot saved")
