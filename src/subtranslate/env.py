from __future__ import annotations

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def load_dotenv_if_present(env_path: Optional[str | Path] = None) -> bool:
    """
    加载 .env 文件（如果存在），已存在的环境变量不会被覆盖。

    默认依次查找当前工作目录与仓库根目录（src/subtranslate/ 之上）下的 .env；
    返回是否实际加载了文件。
    """
    if env_path is not None:
        candidates = [Path(env_path).expanduser()]
    else:
        root = Path(__file__).resolve().parents[2]
        candidates = [Path.cwd() / ".env", root / ".env"]

    for env_file in candidates:
        if env_file.is_file():
            load_dotenv(dotenv_path=env_file, override=False)
            return True
    return False
