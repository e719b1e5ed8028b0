"""Matplotlib views of generated planets.

The Visualizer works on any objects shaped like planet snapshots and
terrain meshes; it does not import the generation package.
"""

import matplotlib.pyplot as plt
import numpy as np
from mpl_toolkits.mplot3d.art3d import Poly3DCollection

_EVENT_COLORS = {
    "comet": "#60A5FA",
    "solar_flare": "#F59E0B",
    "tectonic": "#92400E",
    "volcanic": "#E25822",
    "meteor": "#4A4A4A",
    "asteroid": "#6B7280",
    "aurora": "#34D399",
}


class Visualizer:
    """Plots planet timelines and terrain meshes."""

    def __init__(self, figsize=(12, 6)):
        self.figsize = figsize

    def plot_timeline(self, snapshots, ax=None, title: str = "Planet Timeline"):
        """Plot atmosphere, water and life per day, with temperature on a
        second axis and a marker for every event.

        Args:
            snapshots: Snapshots in day order, e.g. a planet's history
            ax: Optional matplotlib axis for plotting
            title: Title for the plot

        Returns:
            Tuple of (attribute axis, temperature axis)
        """
        if ax is None:
            plt.figure(figsize=self.figsize)
            ax = plt.gca()

        days = [s.current_day for s in snapshots]
        for name, color in (("atmosphere", "#87CEEB"), ("water", "#1B6BB8"),
                            ("life", "#228B22")):
            ax.plot(days, [getattr(s, name) for s in snapshots],
                    label=name.capitalize(), color=color)

        temperature_ax = ax.twinx()
        temperature_ax.plot(days, [s.temperature for s in snapshots],
                            color="#DC2626", linestyle="--", alpha=0.6,
                            label="Temperature")
        temperature_ax.set_ylabel("Temperature (K)")

        if snapshots:
            for event in snapshots[-1].events:
                kind = getattr(event.type, "value", event.type)
                ax.axvline(x=event.day, color=_EVENT_COLORS.get(kind, "gray"),
                           linestyle=":", alpha=0.7)
                ax.text(event.day, 1.02, event.title, rotation=90,
                        va="bottom", ha="center", fontsize=7, alpha=0.8)

        ax.set_ylim(0, 1.0)
        ax.set_title(title)
        ax.set_xlabel("Day")
        ax.set_ylabel("Level")
        ax.legend(loc="upper left")
        ax.grid(alpha=0.3)

        return ax, temperature_ax

    def plot_terrain(self, mesh, ax=None, title: str = "Planet Terrain",
                     elev: float = 20.0, azim: float = 35.0):
        """Render a terrain mesh as flat-colored triangles.

        Args:
            mesh: Object with ``positions`` and ``colors`` arrays of shape
                ``(n, 3)``, three rows per face
            ax: Optional 3D matplotlib axis for plotting
            title: Title for the plot

        Returns:
            The Poly3DCollection added to the axis
        """
        if ax is None:
            fig = plt.figure(figsize=(8, 8))
            ax = fig.add_subplot(111, projection="3d")

        faces = np.asarray(mesh.positions).reshape(-1, 3, 3)
        face_colors = np.asarray(mesh.colors)[::3]

        collection = Poly3DCollection(faces, facecolors=face_colors,
                                      edgecolors="none")
        ax.add_collection3d(collection)

        extent = float(np.abs(faces).max()) if len(faces) else 1.0
        ax.set_xlim(-extent, extent)
        ax.set_ylim(-extent, extent)
        ax.set_zlim(-extent, extent)
        ax.set_box_aspect((1, 1, 1))
        ax.view_init(elev=elev, azim=azim)
        ax.set_axis_off()
        ax.set_title(title)

        return collection

    def plot_surface_objects(self, surface, ax, size_scale: float = 2.0):
        """Scatter trees and rocks over an existing terrain plot."""
        trees = list(surface.trees)
        rocks = list(surface.rocks)
        if trees:
            points = np.array([t.position for t in trees])
            ax.scatter(points[:, 0], points[:, 1], points[:, 2],
                       c=[t.body_color for t in trees],
                       s=[t.body_size * size_scale for t in trees],
                       marker="^", depthshade=False)
        if rocks:
            points = np.array([r.position for r in rocks])
            ax.scatter(points[:, 0], points[:, 1], points[:, 2],
                       c=[r.color for r in rocks],
                       s=[r.size * size_scale for r in rocks],
                       marker="o", depthshade=False)
        return len(trees), len(rocks)
