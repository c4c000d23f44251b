"""Async functional blob operations."""

from pathlib import Path
from typing import Any, Optional, Union

from .core.blob_client import BlobClient
from .core.types import RegistryConfig
from .utils.config import ConfigModel
from .utils.digest import calculate_digest, calculate_file_digest, read_file_chunks


async def check_registry_connectivity(registry_url: str, timeout: int = 10) -> bool:
    """레지스트리 연결 상태를 확인합니다.

    Args:
        registry_url: 레지스트리 URL (예: "http://localhost:15000")
        timeout: 요청 타임아웃 (초, 기본값: 10초)

    Returns:
        bool: /v2/ 엔드포인트가 200 또는 401로 응답하면 True

    Examples:
        accessible = await check_registry_connectivity("http://localhost:15000")
    """
    config = RegistryConfig(url=registry_url, timeout=timeout)
    async with BlobClient(config) as client:
        return await client.check_connectivity()


async def blob_exists(
    registry_url: str, repository: str, digest: Any, timeout: int = 10
) -> bool:
    """blob이 레지스트리에 존재하는지 확인합니다.

    Args:
        registry_url: 레지스트리 URL (예: "http://localhost:15000")
        repository: 저장소 이름 (예: "nginx", "mycompany/myapp")
        digest: blob digest (예: "sha256:abc123...")
        timeout: 요청 타임아웃 (초, 기본값: 10초)

    Returns:
        bool: 존재하면 True, 레지스트리가 404로 응답하면 False

    Raises:
        HTTPStatusError: 404 이외의 오류 상태 코드
        aiohttp.ClientError: 네트워크 오류 (존재 여부를 알 수 없음)

    Examples:
        if not await blob_exists("http://localhost:15000", "nginx", digest):
            await push_blob("http://localhost:15000", "nginx", data, digest)
    """
    config = RegistryConfig(url=registry_url, timeout=timeout)
    async with BlobClient(config) as client:
        return await client.check_blob_exists(repository, digest)


async def get_blob_config(
    registry_url: str,
    repository: str,
    digest: Any,
    model: ConfigModel = None,
    timeout: int = 10,
) -> Any:
    """config blob을 다운로드하여 JSON으로 디코딩합니다.

    Args:
        registry_url: 레지스트리 URL (예: "http://localhost:15000")
        repository: 저장소 이름 (예: "nginx")
        digest: config blob digest
        model: 디코딩 대상 (None이면 dict, dataclass 타입 또는 callable)
        timeout: 요청 타임아웃 (초, 기본값: 10초)

    Returns:
        디코딩된 config

    Raises:
        ConfigDecodeError: JSON이 아니거나 model과 구조가 맞지 않는 경우

    Examples:
        config = await get_blob_config(
            "http://localhost:15000", "nginx", config_digest, model=ImageConfig
        )
        print(config.architecture)
    """
    config = RegistryConfig(url=registry_url, timeout=timeout)
    async with BlobClient(config) as client:
        return await client.get_config(repository, digest, model)


async def push_blob(
    registry_url: str,
    repository: str,
    data: bytes,
    digest: Optional[str] = None,
    timeout: int = 300,
) -> str:
    """메모리의 데이터를 blob으로 업로드합니다.

    Args:
        registry_url: 레지스트리 URL (예: "http://localhost:15000")
        repository: 저장소 이름 (예: "mycompany/myapp")
        data: 업로드할 데이터
        digest: 데이터의 digest (생략 시 sha256으로 계산)
        timeout: 요청 타임아웃 (초, 기본값: 300초)

    Returns:
        str: 업로드한 blob의 digest

    Raises:
        UploadLocationError: 업로드 세션 Location 헤더가 없거나 잘못된 경우
    """
    if digest is None:
        digest = calculate_digest(data)

    config = RegistryConfig(url=registry_url, timeout=timeout)
    async with BlobClient(config) as client:
        return await client.upload_blob(repository, data, digest)


async def push_blob_file(
    registry_url: str,
    repository: str,
    path: Union[str, Path],
    digest: Optional[str] = None,
    timeout: int = 300,
) -> str:
    """파일을 메모리에 올리지 않고 스트리밍으로 blob 업로드합니다.

    Args:
        registry_url: 레지스트리 URL (예: "http://localhost:15000")
        repository: 저장소 이름 (예: "mycompany/myapp")
        path: 업로드할 파일 경로 (상대경로 또는 절대경로)
        digest: 파일의 digest (생략 시 파일을 한 번 읽어 sha256으로 계산)
        timeout: 요청 타임아웃 (초, 기본값: 300초)

    Returns:
        str: 업로드한 blob의 digest

    Raises:
        FileNotFoundError: 파일이 존재하지 않는 경우
        UploadLocationError: 업로드 세션 Location 헤더가 없거나 잘못된 경우

    Examples:
        digest = await push_blob_file(
            "http://localhost:15000", "myapp", "./layers/layer.tar.gz"
        )
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Blob file not found: {path}")

    if digest is None:
        digest = await calculate_file_digest(path)

    config = RegistryConfig(url=registry_url, timeout=timeout)
    async with BlobClient(config) as client:
        return await client.upload_blob(repository, read_file_chunks(path), digest)
