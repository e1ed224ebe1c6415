"""コマンドラインツール"""
