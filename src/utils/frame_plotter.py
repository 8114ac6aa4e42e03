"""Plotter for recorded frames and run diagnostics."""

from pathlib import Path

import h5py
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns


class FramePlotter:
    """Plot speed fields from frames and diagnostics from saved runs.

    Parameters
    ----------
    frames : FrameSequence, optional
        Frames to draw speed fields from.
    runs : dict, str, Path, or list, optional
        HDF5 result files written by ``StableFluidsSolver.save``. Can be:
        - str/Path: Path to HDF5 file
        - dict: Dictionary with 'h5_path' (and optionally 'label')
        - list: List of any of the above

    Attributes
    ----------
    time_series : pd.DataFrame
        Per-step diagnostics for all runs, with ``step`` and ``run`` columns.
    metadata : pd.DataFrame
        One row of run attributes per run.
    """

    def __init__(self, frames=None, runs=None):
        self.frames = frames
        self.time_series = pd.DataFrame()
        self.metadata = pd.DataFrame()

        if runs is None:
            return
        if not isinstance(runs, list):
            runs = [runs]

        time_series_list = []
        metadata_list = []
        for run in runs:
            if isinstance(run, (str, Path)):
                run = {"h5_path": run, "label": Path(run).stem}

            h5_path = Path(run["h5_path"])
            if not h5_path.exists():
                raise FileNotFoundError(f"HDF5 file not found: {h5_path}")
            label = run.get("label", h5_path.stem)

            ts_df, meta = self._load_run(h5_path)
            time_series_list.append(ts_df.assign(run=label, step=lambda df: range(1, len(df) + 1)))
            metadata_list.append(pd.DataFrame([meta]).assign(run=label))

        self.time_series = pd.concat(time_series_list, ignore_index=True)
        self.metadata = pd.concat(metadata_list, ignore_index=True)

    @staticmethod
    def _load_run(h5_path):
        with h5py.File(h5_path, "r") as f:
            ts = {key: f["time_series"][key][()] for key in f["time_series"]}
            meta = {}
            for key, val in f.attrs.items():
                meta[key] = val.decode() if isinstance(val, bytes) else val
        return pd.DataFrame(ts), meta

    def plot_speed(self, index=-1, output_path=None):
        """Plot the speed field of one frame.

        Parameters
        ----------
        index : int
            Frame index into ``frames``.
        output_path : str or Path, optional
            Path to save figure. If None, figure is not saved.
        """
        if self.frames is None or len(self.frames) == 0:
            raise ValueError("No frames loaded")

        vel = self.frames[index].velocity
        speed = np.sqrt(vel[:, :, 0] ** 2 + vel[:, :, 1] ** 2)

        fig, ax = plt.subplots(figsize=(7, 6))
        # Row j grows with y, so the origin sits at the bottom
        im = ax.imshow(speed, origin="lower", cmap="coolwarm")
        ax.set_xlabel("i")
        ax.set_ylabel("j")
        ax.set_title(f"Speed (frame {index})", fontweight="bold")
        plt.colorbar(im, ax=ax, label="|v|")
        plt.tight_layout()

        if output_path:
            plt.savefig(output_path, bbox_inches="tight", dpi=300)
            print(f"Speed plot saved to: {output_path}")
        return fig

    def plot_diagnostics(self, quantity="divergence", output_path=None):
        """Plot a per-step diagnostic for all loaded runs using seaborn.

        Parameters
        ----------
        quantity : str
            Column of ``time_series``: divergence, kinetic_energy, max_speed
            or pressure_residual.
        output_path : str or Path, optional
            Path to save figure. If None, figure is not saved.
        """
        if self.time_series.empty:
            raise ValueError("No runs loaded")
        if quantity not in self.time_series.columns:
            raise ValueError(f"Unknown diagnostic: {quantity}")

        n_runs = self.time_series["run"].nunique()
        g = sns.relplot(
            data=self.time_series,
            x="step",
            y=quantity,
            hue="run" if n_runs > 1 else None,
            kind="line",
            height=5,
            aspect=1.6,
            linewidth=2,
            legend="auto" if n_runs > 1 else False,
        )
        if quantity in ("divergence", "pressure_residual"):
            g.ax.set_yscale("log")
        g.ax.grid(True, alpha=0.3)
        g.ax.set_xlabel("Step")
        g.ax.set_ylabel(quantity.replace("_", " ").capitalize())

        if output_path:
            g.savefig(output_path, bbox_inches="tight", dpi=300)
            print(f"Diagnostics plot saved to: {output_path}")
        return g
