from pathlib import Path

DEBUG_MODE          = True
PREVIEW_ENABLED     = True              # mostrar vista previa mientras no se graba
BASE_DIR            = Path("./data")    # carpeta de salida
OUTPUT_FILENAME     = "kindata.txt"     # se sobrescribe en cada grabación
FPS                 = 30                # objetivo de FPS del sensor
COLOR_WIDTH         = 1280              # resolución del stream de color
COLOR_HEIGHT        = 720
FRAME_TIMEOUT_MS    = 5                 # espera máxima por frame en cada tick
TICK_INTERVAL_MS    = 5                 # intervalo del QTimer del bucle principal

# ==============================================================================
# MARKER COLOR RANGE (HSV)
# ==============================================================================
#
# Experimentally determined bounds of the marker color, in OpenCV HSV units
# (hue 0-179, saturation/value 0-255). An upper bound of 256 leaves a channel
# fully open. Check the threshold preview: the marker must appear as a single
# white blob. If not, adjust the values below and restart.
#
# Format: (H_MIN, H_MAX, S_MIN, S_MAX, V_MIN, V_MAX)
#
# ==============================================================================

# blue sponge at desk
# MARKER_HSV_RANGE = (83, 100, 102, 202, 16, 192)

# blue sponge at door side, full lighting
MARKER_HSV_RANGE = (76, 102, 112, 256, 171, 256)

# ==============================================================================
# MARKER SEARCH
# ==============================================================================
#
# The color frame is downscaled by SMALL_RATIO before segmentation. While the
# marker is being tracked only a square window of side 2 * local_size around
# the previous position is searched, where
#
#     local_size = int(COLOR_HEIGHT * SMALL_RATIO * LOCAL_RATIO)
#
# LOCAL_RATIO must stay below 0.5 so the window fits in the frame.
#
# ==============================================================================

SMALL_RATIO         = 0.5
LOCAL_RATIO         = 0.2
MAX_NUM_OBJECTS     = 50                # más regiones = filtro ruidoso
MIN_OBJECT_AREA     = 20 * 20           # px² en la imagen reducida

# ==============================================================================
# RECORDING
# ==============================================================================
#
# MAX_FRAMES bounds the in-memory buffer. Recording stops on its own when the
# buffer is full and the data is flushed to BASE_DIR / OUTPUT_FILENAME.
#
# RECORDED_JOINTS sets the joint columns of the output file, in order. Each
# joint adds three columns (x, y, z). Names are JointType values.
#
# TIMESTAMP_MODE:
#   "wall_clock": UTC minute*60 + second, plus milliseconds. Wraps every
#                 hour. Compatible with the existing parsing scripts.
#   "monotonic":  seconds since recording start, never wraps.
#
# ==============================================================================

MAX_FRAMES          = 10000
RECORDED_JOINTS     = ("shoulder_left", "elbow_left", "wrist_left", "spine_shoulder")
TIMESTAMP_MODE      = "wall_clock"      # Options: "wall_clock", "monotonic"

# ==============================================================================
# BODY TRACKING
# ==============================================================================

POSE_MIN_DETECTION_CONFIDENCE = 0.5
POSE_MIN_TRACKING_CONFIDENCE  = 0.5
POSE_MIN_VISIBILITY           = 0.5     # visibilidad mínima de los puntos del brazo
