import logging
import os
from datetime import datetime

import cv2
import numpy as np
import pygame

logger = logging.getLogger(__name__)

class VideoRecorder:
    def __init__(self, active=False, output_file=None, fps=30):
        self.active = active
        self.output_file = output_file
        self.fps = fps
        self.writer = None
        self.frame_size = None
        self.frame_count = 0

        if self.active and not self.output_file:
            # Generate filename if not provided
            ts = datetime.now().strftime("%Y%m%d_%H%M%S")
            fname = f"wilson_{ts}.mp4"

            if os.path.exists("recordings"):
                self.output_file = os.path.join("recordings", fname)
            else:
                self.output_file = fname

    @staticmethod
    def frame_from_surface(surface: pygame.Surface) -> np.ndarray:
        """Converts a surface to the (height, width, 3) BGR layout OpenCV writes."""
        # array3d is (width, height, 3) RGB
        view = pygame.surfarray.array3d(surface)
        frame = np.ascontiguousarray(np.transpose(view, (1, 0, 2)))
        return cv2.cvtColor(frame, cv2.COLOR_RGB2BGR)

    def capture_frame(self, surface: pygame.Surface):
        if not self.active:
            return

        # Initialize writer on first frame
        if self.writer is None:
            self.frame_size = surface.get_size()
            fourcc = cv2.VideoWriter_fourcc(*'mp4v')
            self.writer = cv2.VideoWriter(self.output_file, fourcc, self.fps, self.frame_size)
            logger.info(f"Recording started: {self.output_file}")

        if surface.get_size() != self.frame_size:
            # VideoWriter silently drops frames of the wrong size
            frame = self.frame_from_surface(pygame.transform.scale(surface, self.frame_size))
        else:
            frame = self.frame_from_surface(surface)

        self.writer.write(frame)
        self.frame_count += 1

    def stop(self):
        if self.writer:
            self.writer.release()
            logger.info(f"Video saved: {self.output_file} ({self.frame_count} frames)")
            self.writer = None
