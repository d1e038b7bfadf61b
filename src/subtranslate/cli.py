from __future__ import annotations

import argparse
import sys

from .env import load_dotenv_if_present
from .config import SubTranslateConfig
from .pipeline import SubTranslatePipeline


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="subtranslate",
        description="subtranslate: 调用 LLM 接口逐条翻译 SRT 字幕，输出保留原时间轴的双语字幕。",
    )
    parser.add_argument(
        "-i",
        "--input",
        type=str,
        required=True,
        metavar="FILE",
        help="输入 SRT 字幕文件路径。",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        required=True,
        metavar="FILE",
        help="输出双语 SRT 字幕文件路径。",
    )
    parser.add_argument(
        "--env-file",
        type=str,
        default=None,
        help="指定 .env 文件路径（默认查找当前目录与仓库根目录）。",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    parser = build_arg_parser()
    args = parser.parse_args(argv)

    # 在构建配置之前加载 .env 中的环境变量
    load_dotenv_if_present(args.env_file)

    try:
        config = SubTranslateConfig.from_paths(
            input_path=args.input,
            output_path=args.output,
        )
        pipeline = SubTranslatePipeline(config)
        result = pipeline.run()
        print("字幕翻译完成")
        print(f"   输入: {config.input_path}")
        print(f"   输出: {result.output_path}")
        print(f"   条目数: {result.entry_count}")
        print(f"   Token 用量: {result.total_cost}")
        return 0
    except KeyboardInterrupt:
        print("\n用户中断")
        return 1
    except Exception as exc:
        print(f"处理失败: {exc}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
