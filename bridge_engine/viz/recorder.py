import logging
import os
from datetime import datetime

import cv2
import numpy as np

logger = logging.getLogger(__name__)

class VideoRecorder:
    """Writes RGB frames to an mp4 file, opening the writer on the first frame."""

    def __init__(self, active=False, output_file=None, fps=30):
        self.active = active
        self.output_file = output_file
        self.fps = fps
        self.writer = None
        self.frame_count = 0

        if self.active and not self.output_file:
            ts = datetime.now().strftime("%Y%m%d_%H%M%S")
            os.makedirs("recordings", exist_ok=True)
            self.output_file = os.path.join("recordings", f"bridge_sim_{ts}.mp4")

    def capture_frame(self, frame: np.ndarray):
        """frame is (width, height, 3) RGB, as returned by pygame.surfarray.array3d."""
        if not self.active:
            return

        # OpenCV wants (height, width, 3) BGR
        image = cv2.cvtColor(np.ascontiguousarray(np.transpose(frame, (1, 0, 2))), cv2.COLOR_RGB2BGR)

        if self.writer is None:
            height, width = image.shape[:2]
            fourcc = cv2.VideoWriter_fourcc(*'mp4v')
            self.writer = cv2.VideoWriter(self.output_file, fourcc, self.fps, (width, height))
            logger.info(f"Recording started: {self.output_file}")

        self.writer.write(image)
        self.frame_count += 1

    def stop(self):
        if self.writer:
            self.writer.release()
            logger.info(f"Video saved: {self.output_file} ({self.frame_count} frames)")
            self.writer = None
