"""
Domain Constants: 대시보드 전역 상수.

패널 레이아웃, 애니메이션 주기, 설정 파일 경로 등.
"""

# =============================================================================
# Panel Layout (패널 레이아웃)
# =============================================================================
# 폭은 테두리 문자 포함 전체 표시 폭 (컬럼 수)
# 내용 영역 = PANEL_WIDTH - 2

DEFAULT_PANEL_WIDTH = 76
PANEL_TITLE = "服务器状态"

# 라벨 컬럼 폭 (라벨 + 패딩, "│ " 구분자 제외)
LABEL_WIDTH = 10

# =============================================================================
# Animation (애니메이션)
# =============================================================================

DEFAULT_TICK_INTERVAL_MS = 80
STARTUP_ANIMATION_SECONDS = 2.0
STARTUP_ANIMATION_INTERVAL_MS = 80

# =============================================================================
# Shutdown / Error Messages (구분선)
# =============================================================================

MESSAGE_SEPARATOR_WIDTH = 60

# =============================================================================
# Config Files (설정 파일)
# =============================================================================

DEFAULT_CONFIG_FILENAME = "default.yaml"
ENV_DEVELOPMENT = "development"
