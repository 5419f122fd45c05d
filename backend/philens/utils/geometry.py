"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def as_points(points) -> NDArray[np.float64]:
    """Coerce a point sequence to a fresh Nx2 float array.

    Always copies, so callers can never mutate the caller's input through it.
    """
    arr = np.array(points, dtype=np.float64)
    if arr.size == 0:
        return np.empty((0, 2))
    return arr.reshape(-1, 2)


def all_finite(points: NDArray[np.float64]) -> bool:
    return bool(np.all(np.isfinite(points)))


def bbox(points: NDArray[np.float64]) -> tuple[float, float, float, float]:
    """Compute (xmin, ymin, xmax, ymax) bounding box."""
    if len(points) == 0:
        return (0.0, 0.0, 0.0, 0.0)
    return (
        float(np.min(points[:, 0])),
        float(np.min(points[:, 1])),
        float(np.max(points[:, 0])),
        float(np.max(points[:, 1])),
    )


def centroid(points: NDArray[np.float64]) -> tuple[float, float]:
    """Compute centroid of a point set."""
    if len(points) == 0:
        return (0.0, 0.0)
    return (float(np.mean(points[:, 0])), float(np.mean(points[:, 1])))


def centroid_distances(points: NDArray[np.float64]) -> NDArray[np.float64]:
    """Distance from centroid to each point."""
    cx, cy = centroid(points)
    return np.sqrt((points[:, 0] - cx) ** 2 + (points[:, 1] - cy) ** 2)


def to_polar(
    points: NDArray[np.float64],
    center: tuple[float, float],
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """(r, theta) of each point about an explicit center. theta in (-pi, pi]."""
    dx = points[:, 0] - center[0]
    dy = points[:, 1] - center[1]
    return np.hypot(dx, dy), np.arctan2(dy, dx)


def drop_repeated(points: NDArray[np.float64], eps: float = 1e-12) -> NDArray[np.float64]:
    """Remove consecutive duplicates so every segment has a defined direction."""
    if len(points) < 2:
        return points
    steps = np.hypot(*np.diff(points, axis=0).T)
    keep = np.concatenate([[True], steps > eps])
    return points[keep]


def tangent_angles(points: NDArray[np.float64]) -> NDArray[np.float64]:
    """Tangent angle at each point (atan2 of forward difference)."""
    diffs = np.diff(points, axis=0)
    angles = np.arctan2(diffs[:, 1], diffs[:, 0])
    return angles


def turning_angles(points: NDArray[np.float64]) -> NDArray[np.float64]:
    """Signed turn between consecutive segments, wrapped to [-pi, pi)."""
    angles = tangent_angles(points)
    if len(angles) < 2:
        return np.array([])
    diffs = np.diff(angles)
    return (diffs + np.pi) % (2 * np.pi) - np.pi


def rect_intersection_area(
    a: tuple[float, float, float, float],
    b: tuple[float, float, float, float],
) -> float:
    """Overlap area of two (xmin, ymin, xmax, ymax) boxes."""
    x_overlap = max(0.0, min(a[2], b[2]) - max(a[0], b[0]))
    y_overlap = max(0.0, min(a[3], b[3]) - max(a[1], b[1]))
    return x_overlap * y_overlap


def downsample_points(points: NDArray[np.float64], target_count: int) -> NDArray[np.float64]:
    """Evenly strided subset of at most ``target_count`` points, order kept."""
    if target_count <= 0 or len(points) <= target_count:
        return points
    step = len(points) / target_count
    idx = (np.arange(target_count) * step).astype(int)
    return points[idx]


def smooth_points(points: NDArray[np.float64], window: int = 3) -> NDArray[np.float64]:
    """Centered moving average; the window shrinks at both ends."""
    n = len(points)
    if window < 2 or n <= window:
        return points
    half = window // 2
    out = np.empty_like(points)
    for i in range(n):
        lo = max(0, i - half)
        hi = min(n, i + half + 1)
        out[i] = points[lo:hi].mean(axis=0)
    return out
