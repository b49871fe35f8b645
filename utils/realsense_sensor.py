"""Intel RealSense adapter providing color, color->3D mapping and skeleton data."""
from typing import Optional, Tuple
import numpy as np
import logging

from domain.skeleton import SensorFrame, Skeleton
from utils.sensor_source import SensorSource
from config import DEBUG_MODE, FPS, COLOR_WIDTH, COLOR_HEIGHT, FRAME_TIMEOUT_MS

logger = logging.getLogger(__name__)

WARMUP_FRAMES = 30


def build_pixel_rays(width: int, height: int,
                     fx: float, fy: float, ppx: float, ppy: float) -> Tuple[np.ndarray, np.ndarray]:
    """
    Normalized image-plane coordinates of every pixel (pinhole model).

    Returns:
        (x_ray, y_ray) arrays of shape (height, width); multiplying by depth
        gives camera-space X and Y
    """
    u = np.arange(width, dtype=np.float32)
    v = np.arange(height, dtype=np.float32)
    uu, vv = np.meshgrid(u, v)
    return (uu - ppx) / fx, (vv - ppy) / fy


def depth_to_camera_table(depth_image: np.ndarray, depth_scale: float,
                          x_ray: np.ndarray, y_ray: np.ndarray) -> np.ndarray:
    """
    Deproject an aligned depth image into a color->3D mapping table.

    Args:
        depth_image: uint16 depth aligned to the color image (H x W)
        depth_scale: Meters per depth unit
        x_ray, y_ray: Output of build_pixel_rays()

    Returns:
        float32 array (H x W x 3); pixels without depth are (0, 0, 0)
    """
    z = depth_image.astype(np.float32) * depth_scale
    table = np.empty(depth_image.shape + (3,), dtype=np.float32)
    table[..., 0] = x_ray * z
    table[..., 1] = y_ray * z
    table[..., 2] = z
    return table


class RealSenseSensor(SensorSource):
    """
    RealSense D4xx camera as the tracking loop's sensor.

    Handles:
    - Color (bgr8) and depth (z16) streams at the same resolution
    - Depth alignment to the color stream
    - Per-pixel color->3D table from the color intrinsics
    - Body tracking through PoseEstimator (optional)
    """

    def __init__(self,
                 width: int = COLOR_WIDTH,
                 height: int = COLOR_HEIGHT,
                 fps: int = FPS,
                 frame_timeout_ms: int = FRAME_TIMEOUT_MS,
                 serial_number: Optional[str] = None,
                 pose_estimator=None):
        """
        Initialize RealSense sensor.

        Args:
            width: Color/depth stream width
            height: Color/depth stream height
            fps: Target frame rate
            frame_timeout_ms: Max wait per acquire(); no frame -> None
            serial_number: Open a specific device when several are connected
            pose_estimator: Object with estimate(color_image, table) -> Skeleton
        """
        self.width = width
        self.height = height
        self.fps = fps
        self.frame_timeout_ms = frame_timeout_ms
        self.serial_number = serial_number
        self.pose_estimator = pose_estimator

        self.pipeline = None
        self.config = None
        self.align = None
        self.depth_scale = 0.001
        self.x_ray: Optional[np.ndarray] = None
        self.y_ray: Optional[np.ndarray] = None
        self.frame_count = 0

    def initialize(self) -> bool:
        """
        Initialize RealSense pipeline and configure streams.

        Returns:
            True if initialization successful, False otherwise
        """
        try:
            import pyrealsense2 as rs

            self.pipeline = rs.pipeline()
            self.config = rs.config()
            if self.serial_number:
                self.config.enable_device(self.serial_number)

            self.config.enable_stream(rs.stream.color, self.width, self.height, rs.format.bgr8, self.fps)
            self.config.enable_stream(rs.stream.depth, self.width, self.height, rs.format.z16, self.fps)

            profile = self.pipeline.start(self.config)

            depth_sensor = profile.get_device().first_depth_sensor()
            self.depth_scale = depth_sensor.get_depth_scale()

            color_profile = profile.get_stream(rs.stream.color).as_video_stream_profile()
            intr = color_profile.get_intrinsics()
            self.x_ray, self.y_ray = build_pixel_rays(
                intr.width, intr.height, intr.fx, intr.fy, intr.ppx, intr.ppy
            )

            # Align depth to color so the table is indexed by color pixels
            self.align = rs.align(rs.stream.color)

            # Warm up camera (discard first few frames)
            for _ in range(WARMUP_FRAMES):
                self.pipeline.wait_for_frames()

            logger.info(f"RealSense initialized: {self.width}x{self.height}@{self.fps}, "
                        f"depth scale {self.depth_scale}")
            return True

        except Exception as e:
            logger.error(f"Failed to initialize RealSense camera: {e}")
            if DEBUG_MODE:
                logger.exception("RealSense initialization traceback")
            self.release()
            return False

    def acquire(self) -> Optional[SensorFrame]:
        if self.pipeline is None:
            raise RuntimeError("RealSenseSensor.acquire() called before initialize()")

        success, frames = self.pipeline.try_wait_for_frames(self.frame_timeout_ms)
        if not success:
            return None

        aligned_frames = self.align.process(frames)
        color_frame = aligned_frames.get_color_frame()
        depth_frame = aligned_frames.get_depth_frame()
        if not color_frame or not depth_frame:
            return None

        self.frame_count += 1
        color_image = np.asanyarray(color_frame.get_data()).copy()
        depth_image = np.asanyarray(depth_frame.get_data())
        table = depth_to_camera_table(depth_image, self.depth_scale, self.x_ray, self.y_ray)

        if self.pose_estimator is not None:
            skeleton = self.pose_estimator.estimate(color_image, table)
        else:
            skeleton = Skeleton.untracked()

        return SensorFrame(
            color_image=color_image,
            color_to_camera=table,
            skeleton=skeleton,
            captured_at=color_frame.get_timestamp(),
        )

    def release(self):
        if self.pipeline is not None:
            try:
                self.pipeline.stop()
            except RuntimeError as e:
                logger.debug(f"Pipeline already stopped: {e}")
            self.pipeline = None
        if self.pose_estimator is not None:
            self.pose_estimator.close()

    def __del__(self):
        self.release()
