"""
functions_deploy
----------------

Firebase Cloud Functions 배포용 CI 스텝 패키지.
firebase.json 의 functions[].source 디렉토리마다 의존성(npm / pip+venv)을 설치하고,
서비스 계정 키로 firebase-tools 를 실행해 functions 만 배포한 뒤 결과를 CI 에 보고한다.
"""

__all__ = [
    "config",
    "orchestrator",
]
