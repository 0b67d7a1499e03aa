"""Shared fixtures: synthetic GA drawings."""

import cv2
import numpy as np
import pytest

from gahull.shared.config import Settings


PAGE_WIDTH = 1000
PAGE_HEIGHT = 800

# (x, y, width, height) of each view frame drawn on the synthetic page
SIDE_FRAME = (50, 50, 600, 120)
TOP_FRAME = (50, 300, 400, 200)
BODY_FRAME = (600, 300, 200, 200)


def draw_frame(image, frame, thickness=3):
    x, y, w, h = frame
    cv2.rectangle(image, (x, y), (x + w, y + h), (0, 0, 0), thickness)


@pytest.fixture
def settings():
    """Default settings, independent of any config file on disk."""
    return Settings()


@pytest.fixture
def ga_page():
    """White page with three view frames and a speck of noise."""
    page = np.full((PAGE_HEIGHT, PAGE_WIDTH, 3), 255, dtype=np.uint8)
    for frame in (SIDE_FRAME, TOP_FRAME, BODY_FRAME):
        draw_frame(page, frame)
    cv2.rectangle(page, (900, 750), (902, 752), (0, 0, 0), -1)
    return page


@pytest.fixture
def view_image():
    """Single view image with a long hull-like outline and a small box."""
    image = np.full((200, 400, 3), 255, dtype=np.uint8)
    cv2.rectangle(image, (20, 80), (380, 110), (0, 0, 0), 2)
    cv2.rectangle(image, (150, 140), (200, 190), (0, 0, 0), 2)
    return image
