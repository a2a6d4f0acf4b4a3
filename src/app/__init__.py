"""
App layer: API 서버 (FastAPI).

역할:
- lifespan에서 설정/로깅/데이터 저장소 준비
- 시작 대시보드 표시 및 종료 시 정리
- 상태 조회 API
"""
