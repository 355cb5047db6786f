"""lockgraph - 基于锁文件的依赖图解析"""

__version__ = "1.0.0"
