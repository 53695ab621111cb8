"""Presentation Layer.

Message Consumer에서의 Presentation Layer:
- FrameDispatcher: 프레임 명령별 라우팅
- RequestAdapter: 프레임 ↔ 요청/응답 변환
- ConsumerAdapter: dispatch, reply, ack
- controllers: 기본 제공 컨트롤러
"""
