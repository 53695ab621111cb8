"""Application Layer.

- roster: 서버 목록 / round-robin
- engine: EngineLoop, 재시도/failover 정책, 종료 토큰
- dispatch: route → 컨트롤러 디스패치 (애플리케이션 측)
"""
