"""
ビジネスロジック層

各サービスは Session を受け取り、ユーザー単位で絞り込んだ操作を提供する
"""
