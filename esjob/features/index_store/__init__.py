"""Elasticsearch index store feature.

Lets a Hadoop streaming job name `es://index/type` as its input or output.
The invocation override swaps in the Wonderdog streaming formats, stages
data through a temporary HDFS path, and adds the jobconf parameters the
formats read.
"""
