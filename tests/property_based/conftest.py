"""
Shared Hypothesis configuration for property-based testing across fplib.
"""
# 说明：属性测试的 Hypothesis 全局配置。
# 职责：
# - 注册并加载统一的 settings profile，关闭单例耗时上限（草图在大输入上耗时波动较大）
# - 可通过环境变量 HYPOTHESIS_PROFILE 切换到更深入的 "thorough" 配置

import os

from hypothesis import HealthCheck, settings

settings.register_profile(
    "fplib",
    max_examples=60,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.register_profile("thorough", max_examples=500, deadline=None)
settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "fplib"))
