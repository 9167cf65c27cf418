"""
クリーンアップバッチ実行スクリプト

使い方:
    python -m app.scripts.run_cleanup

cronで定期実行する場合:
    0 * * * * cd /path/to/project && python -m app.scripts.run_cleanup >> /var/log/lifelog_cleanup.log 2>&1
"""
import logging
import sys
import traceback
from datetime import datetime

from dotenv import load_dotenv

load_dotenv()

from app.services.cleanup_batch import run_cleanup_batch


def main():
    """メイン処理"""
    print("=" * 60)
    print("LifeLog クリーンアップバッチ処理")
    print(f"   実行日時: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print("=" * 60)

    try:
        result = run_cleanup_batch()

        print("\n実行結果:")
        print(f"   ステータス: {result['status']}")
        print(f"   期限切れリセットトークン削除: {result['expired_tokens']}件")
        print(f"   期限切れセッション削除: {result['expired_sessions']}件")
        print(f"   延滞にした貸出: {result['overdue_lendings']}件")
        print(f"   処理時間: {result['duration_seconds']:.2f}秒")

        print("\nバッチ処理が完了しました")
        return 0

    except Exception as e:
        print(f"\nエラーが発生しました: {str(e)}")
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    sys.exit(main())
