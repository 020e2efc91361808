"""GUI application using tkinter."""

import logging
import tkinter as tk
from tkinter import ttk, messagebox, colorchooser
from typing import Dict, Optional

from matplotlib.figure import Figure
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg

from galaxy_cloud.generator import GalaxyGenerator
from galaxy_cloud.params import PARAMETER_RANGES, InvalidParameter, ParameterSet, color_to_hex
from galaxy_cloud.regeneration import Regenerator
from galaxy_cloud.render.renderer_3d import CloudRenderer
from galaxy_cloud.rotation import FrameClock
from galaxy_cloud.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

SLIDERS = [
    ("Count", "count"),
    ("Size", "size"),
    ("Radius", "radius"),
    ("Branches", "branches"),
    ("Spin", "spin"),
    ("Randomness", "randomness"),
    ("Randomness Power", "randomness_power"),
]
FRAME_MS = 33
DEBOUNCE_MS = 150


class GalaxyCloudGUI:
    """Slider panel on the right, rotating galaxy on the left."""

    def __init__(self, root, params: Optional[ParameterSet] = None, seed: Optional[int] = None):
        self.root = root
        self.root.title("Galaxy Cloud")
        self.root.geometry("1200x800")

        self.params = params if params is not None else ParameterSet()
        self.regenerator = Regenerator(GalaxyGenerator(seed=seed))
        self.clock = FrameClock()
        self.vars: Dict[str, tk.Variable] = {}
        self.value_labels: Dict[str, ttk.Label] = {}
        self.colors = {
            'color_inside': self.params.color_inside,
            'color_outside': self.params.color_outside,
        }
        self._pending: Optional[str] = None

        self._create_widgets()
        self._setup_layout()
        self._request(self.params)
        self.root.after(FRAME_MS, self._tick)
        self.root.protocol("WM_DELETE_WINDOW", self.close)

    def _create_widgets(self):
        """Create GUI widgets."""
        self.control_frame = ttk.LabelFrame(self.root, text="Galaxy", padding=10)

        for row, (label, name) in enumerate(SLIDERS):
            low, high, step = PARAMETER_RANGES[name]
            ttk.Label(self.control_frame, text=f"{label}:").grid(row=row, column=0, sticky='w', pady=5)
            var = tk.DoubleVar(value=getattr(self.params, name))
            scale = ttk.Scale(self.control_frame, from_=low, to=high, variable=var,
                              orient='horizontal', length=180)
            scale.grid(row=row, column=1, pady=5)
            value_label = ttk.Label(self.control_frame, width=8)
            value_label.grid(row=row, column=2, sticky='w')
            scale.configure(command=lambda _v, n=name: self._on_slider(n))
            self.vars[name] = var
            self.value_labels[name] = value_label
            self._update_label(name)

        row = len(SLIDERS)
        self.color_buttons = {}
        for offset, (label, name) in enumerate([("Inside Color", "color_inside"),
                                                ("Outside Color", "color_outside")]):
            ttk.Label(self.control_frame, text=f"{label}:").grid(row=row + offset, column=0, sticky='w', pady=5)
            button = tk.Button(self.control_frame, width=12, bg=color_to_hex(self.colors[name]),
                               command=lambda n=name: self._pick_color(n))
            button.grid(row=row + offset, column=1, pady=5, sticky='w')
            self.color_buttons[name] = button

        self.status_label = ttk.Label(self.control_frame, text="Generating...", foreground="orange")
        self.status_label.grid(row=row + 2, column=0, columnspan=3, pady=10)

        self.figure = Figure(figsize=(8, 8), dpi=100)
        self.canvas = FigureCanvasTkAgg(self.figure, master=self.root)
        self.renderer = CloudRenderer(figure=self.figure, interactive=False)

    def _setup_layout(self):
        """Setup window layout."""
        self.control_frame.pack(side='right', fill='y', padx=10, pady=10)
        self.canvas.get_tk_widget().pack(side='left', fill='both', expand=True)

    def _slider_value(self, name: str):
        # ttk.Scale is continuous; snap to the control step
        step = PARAMETER_RANGES[name][2]
        value = round(self.vars[name].get() / step) * step
        if name in ("count", "branches"):
            return int(round(value))
        return round(value, 6)

    def _update_label(self, name: str):
        self.value_labels[name].config(text=f"{self._slider_value(name):g}")

    def _on_slider(self, name: str):
        self._update_label(name)
        self._schedule_update()

    def _pick_color(self, name: str):
        _rgb, hex_color = colorchooser.askcolor(color=color_to_hex(self.colors[name]), parent=self.root)
        if hex_color is None:
            return
        self.colors[name] = hex_color
        self.color_buttons[name].config(bg=hex_color)
        self._schedule_update()

    def _schedule_update(self):
        """Coalesce bursts of slider motion into one snapshot."""
        if self._pending is not None:
            self.root.after_cancel(self._pending)
        self._pending = self.root.after(DEBOUNCE_MS, self._commit_controls)

    def _commit_controls(self):
        self._pending = None
        values = {name: self._slider_value(name) for _label, name in SLIDERS}
        try:
            params = ParameterSet(**values, **self.colors).clamped()
        except InvalidParameter as e:
            messagebox.showerror("Error", f"Invalid parameter {e}")
            return
        self._request(params)

    def _request(self, params: ParameterSet):
        try:
            future = self.regenerator.request(params)
        except InvalidParameter as e:
            messagebox.showerror("Error", f"Invalid parameter {e}")
            return
        self.params = params
        self.status_label.config(text="Generating...", foreground="orange")
        future.add_done_callback(lambda f: self.root.after(0, self._on_generated, f))

    def _on_generated(self, future):
        error = future.exception()
        if error is not None:
            logger.error(f"Generation failed: {error}")
            messagebox.showerror("Error", f"Failed to generate: {error}")
            return
        cloud = future.result()
        if cloud is not None:
            self.status_label.config(text=f"{len(cloud)} particles", foreground="green")

    def _tick(self):
        """Draw the current cloud at the current orientation."""
        cloud = self.regenerator.current
        if cloud is not None:
            self.renderer.render(cloud, self.clock.orientation())
            self.canvas.draw_idle()
        self.root.after(FRAME_MS, self._tick)

    def close(self):
        self.regenerator.close()
        self.renderer.close()
        self.root.destroy()


def run_gui():
    """Run GUI application."""
    setup_logging()
    root = tk.Tk()
    GalaxyCloudGUI(root)
    root.mainloop()


if __name__ == '__main__':
    run_gui()
