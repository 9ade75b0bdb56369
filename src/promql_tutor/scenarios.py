"""Built-in catalog of learning scenarios and sample queries.

Sample queries use metrics exposed by the public Prometheus demo server
(demo.promlabs.com): ``demo_api_request_duration_seconds_*`` histograms with
status/method/path labels, ``demo_api_http_requests_in_progress``,
``demo_cpu_usage_seconds_total``, ``demo_disk_*``, ``demo_memory_usage_bytes``,
``demo_num_cpus`` and ``demo_items_shipped_total``.
"""

from __future__ import annotations

from dataclasses import dataclass


class ScenarioNotFoundError(LookupError):
    """Raised when a scenario id is not in the catalog."""


@dataclass(frozen=True)
class SampleQuery:
    """Example query with a short label and a hand-written explanation."""

    query: str
    description: str
    explanation: str | None = None


@dataclass(frozen=True)
class Scenario:
    """Themed group of sample queries."""

    id: str
    title: str
    description: str
    learning_objectives: tuple[str, ...]
    sample_queries: tuple[SampleQuery, ...]


SCENARIOS: tuple[Scenario, ...] = (
    Scenario(
        id="getting-started",
        title="Getting Started",
        description=(
            "Learn the basics of PromQL by exploring real metrics from the Prometheus demo server."
        ),
        learning_objectives=(
            "Understand what metrics and labels are",
            "Write your first PromQL query",
            "Filter metrics using label selectors",
            "View raw metric data vs computed rates",
        ),
        sample_queries=(
            SampleQuery(
                "up",
                "Target health status",
                'The "up" metric shows whether Prometheus can scrape a target. '
                "1 means up, 0 means down.",
            ),
            SampleQuery(
                "demo_api_http_requests_in_progress",
                "Current in-progress requests",
                "This gauge shows the number of HTTP requests currently being processed. "
                "Unlike counters, gauges can go up and down.",
            ),
            SampleQuery(
                'demo_api_http_requests_in_progress{job="demo"}',
                "Filter by job label",
                "Label selectors in curly braces filter which time series are returned.",
            ),
            SampleQuery(
                "demo_cpu_usage_seconds_total",
                "CPU usage counter",
                "This counter tracks total CPU seconds used. Counters only increase, "
                "so you need rate() to see per-second values.",
            ),
            SampleQuery(
                "rate(demo_cpu_usage_seconds_total[5m])",
                "CPU usage rate",
                "rate() calculates the per-second average rate of increase over a window. "
                '[5m] means "look at the last 5 minutes".',
            ),
        ),
    ),
    Scenario(
        id="error-tracking",
        title="Error Rate Tracking",
        description=(
            "Learn to monitor and analyze error rates, a critical skill for maintaining "
            "service reliability."
        ),
        learning_objectives=(
            "Calculate error rates from request metrics",
            "Filter by HTTP status codes using regex",
            "Build error ratio queries for SLIs",
            "Group errors by different dimensions",
            "Detect error spikes and anomalies",
        ),
        sample_queries=(
            SampleQuery(
                'rate(demo_api_request_duration_seconds_count{status=~"5.."}[5m])',
                "Server errors (5xx) per second",
                'Filters for HTTP 5xx status codes using regex (=~). "5.." matches 500, 501, 502.',
            ),
            SampleQuery(
                'sum(rate(demo_api_request_duration_seconds_count{status=~"5.."}[5m]))',
                "Total 5xx errors/sec",
                "Sums all 5xx errors across all endpoints and instances.",
            ),
            SampleQuery(
                'rate(demo_api_request_duration_seconds_count{status=~"4.."}[5m])',
                "Client errors (4xx) per second",
                "4xx errors indicate client issues such as bad requests or missing resources.",
            ),
            SampleQuery(
                "sum by (status) "
                '(rate(demo_api_request_duration_seconds_count{status=~"[45].."}[5m]))',
                "Error rate by status code",
                "Groups both 4xx and 5xx errors by exact status code.",
            ),
            SampleQuery(
                'sum(rate(demo_api_request_duration_seconds_count{status=~"5.."}[5m])) '
                "/ sum(rate(demo_api_request_duration_seconds_count[5m])) * 100",
                "Error percentage (SLI)",
                "Calculates errors as a percentage of total requests, a standard SLI.",
            ),
            SampleQuery(
                "sum by (path) "
                '(rate(demo_api_request_duration_seconds_count{status=~"5.."}[5m]))',
                "Errors by endpoint/path",
                "Groups errors by the path label to identify which endpoints are failing.",
            ),
            SampleQuery(
                "sum by (instance) "
                '(rate(demo_api_request_duration_seconds_count{status=~"5.."}[5m]))',
                "Errors by instance/server",
                "Groups errors by instance to find problematic servers.",
            ),
            SampleQuery(
                "topk(5, sum by (path) "
                '(rate(demo_api_request_duration_seconds_count{status=~"5.."}[5m])))',
                "Top 5 error-prone endpoints",
                "Combines sum by path with topk to list the 5 endpoints with the most errors.",
            ),
        ),
    ),
    Scenario(
        id="http-metrics",
        title="HTTP Request Analysis",
        description="Analyze HTTP request patterns using the demo API metrics.",
        learning_objectives=(
            "Understand gauge vs counter metrics",
            "Calculate rates from counter metrics",
            "Group results by different dimensions",
            "Use aggregation functions",
        ),
        sample_queries=(
            SampleQuery(
                "demo_api_http_requests_in_progress",
                "Current in-flight requests",
                "Shows how many HTTP requests are currently being processed.",
            ),
            SampleQuery(
                "sum by (instance) (demo_api_http_requests_in_progress)",
                "In-flight requests by instance",
                "Groups the in-progress request count by instance label.",
            ),
            SampleQuery(
                "rate(demo_api_request_duration_seconds_count[5m])",
                "Request rate (req/s)",
                "The _count series of a histogram tracks total observations. "
                "Its rate is requests per second.",
            ),
            SampleQuery(
                "sum(rate(demo_api_request_duration_seconds_count[5m]))",
                "Total request throughput",
                "Sums all request rates to give total throughput.",
            ),
            SampleQuery(
                "sum by (method) (rate(demo_api_request_duration_seconds_count[5m]))",
                "Request rate by HTTP method",
                "Groups by method to see traffic broken down by operation type.",
            ),
            SampleQuery(
                "topk(5, sum by (instance) (rate(demo_api_request_duration_seconds_count[5m])))",
                "Top 5 instances by traffic",
                "topk() returns only the k highest values.",
            ),
        ),
    ),
    Scenario(
        id="latency",
        title="Latency Analysis",
        description=(
            "Master histogram metrics to understand request latency distributions and percentiles."
        ),
        learning_objectives=(
            "Understand histogram bucket metrics",
            "Calculate percentile latencies with histogram_quantile",
            "Compare latency across dimensions",
            "Analyze latency distributions",
        ),
        sample_queries=(
            SampleQuery(
                "histogram_quantile(0.95, rate(demo_api_request_duration_seconds_bucket[5m]))",
                "95th percentile latency",
                "95% of requests complete faster than this value.",
            ),
            SampleQuery(
                "histogram_quantile(0.50, rate(demo_api_request_duration_seconds_bucket[5m]))",
                "Median latency (p50)",
                "Half of requests are faster, half are slower.",
            ),
            SampleQuery(
                "histogram_quantile(0.99, rate(demo_api_request_duration_seconds_bucket[5m]))",
                "99th percentile latency",
                'p99 shows the "worst case" for most users.',
            ),
            SampleQuery(
                "histogram_quantile(0.95, sum by (le) "
                "(rate(demo_api_request_duration_seconds_bucket[5m])))",
                "Overall p95 latency",
                'Summing all buckets while keeping the "le" label gives the overall latency.',
            ),
            SampleQuery(
                "histogram_quantile(0.95, sum by (path, le) "
                "(rate(demo_api_request_duration_seconds_bucket[5m])))",
                "p95 latency by endpoint",
                "Groups by path to compare latency across endpoints.",
            ),
            SampleQuery(
                "rate(demo_api_request_duration_seconds_sum[5m]) "
                "/ rate(demo_api_request_duration_seconds_count[5m])",
                "Average request duration",
                "Dividing the sum of durations by the count gives the average.",
            ),
        ),
    ),
    Scenario(
        id="resource-usage",
        title="Resource Usage",
        description="Monitor CPU, memory, and disk usage using demo metrics.",
        learning_objectives=(
            "Monitor resource consumption",
            "Calculate utilization percentages",
            "Track resource trends over time",
            "Compare usage across instances",
        ),
        sample_queries=(
            SampleQuery(
                "demo_memory_usage_bytes",
                "Current memory usage",
                "Shows the current memory usage in bytes.",
            ),
            SampleQuery(
                "demo_memory_usage_bytes / 1024 / 1024",
                "Memory usage in MB",
                "Dividing bytes by 1024 twice converts to megabytes.",
            ),
            SampleQuery(
                "demo_disk_usage_bytes / demo_disk_total_bytes * 100",
                "Disk usage percentage",
                "Divides used by total and multiplies by 100.",
            ),
            SampleQuery(
                "rate(demo_cpu_usage_seconds_total[5m])",
                "CPU cores in use",
                "A value of 1.0 means one full CPU core is busy.",
            ),
            SampleQuery(
                "rate(demo_cpu_usage_seconds_total[5m]) / demo_num_cpus * 100",
                "CPU utilization percentage",
                "Dividing CPU usage by the number of CPUs gives utilization.",
            ),
        ),
    ),
    Scenario(
        id="aggregations",
        title="Aggregation Deep Dive",
        description="Master PromQL aggregation operators and understand when to use each one.",
        learning_objectives=(
            "Use sum, avg, max, min, count effectively",
            'Understand "by" vs "without" grouping',
            "Combine aggregations with rate functions",
            "Build meaningful aggregated metrics",
        ),
        sample_queries=(
            SampleQuery(
                "sum(demo_memory_usage_bytes)",
                "Total memory usage",
                "sum() adds up all values.",
            ),
            SampleQuery(
                "sum by (instance) (demo_memory_usage_bytes)",
                "Memory per instance",
                '"by (instance)" keeps only the instance label in results.',
            ),
            SampleQuery(
                "avg(demo_memory_usage_bytes)",
                "Average memory usage",
                "avg() calculates the mean across all series.",
            ),
            SampleQuery(
                "max(demo_memory_usage_bytes)",
                "Peak memory usage",
                "max() returns the highest value.",
            ),
            SampleQuery(
                "count(demo_api_http_requests_in_progress)",
                "Count of time series",
                "count() returns the number of time series, not the sum of values.",
            ),
            SampleQuery(
                "sum without (instance) (demo_memory_usage_bytes)",
                "Sum without instance",
                '"without (instance)" removes the instance label while keeping all others.',
            ),
        ),
    ),
    Scenario(
        id="topk-analysis",
        title="Top/Bottom Analysis",
        description="Use topk and bottomk to focus on the most important time series.",
        learning_objectives=(
            "Find highest and lowest values",
            "Combine with aggregations for rankings",
            "Identify outliers",
            'Build "top offenders" queries',
        ),
        sample_queries=(
            SampleQuery(
                "topk(3, demo_memory_usage_bytes)",
                "Top 3 by memory",
                "topk(3, ...) returns only the 3 highest values.",
            ),
            SampleQuery(
                "bottomk(3, demo_memory_usage_bytes)",
                "Bottom 3 by memory",
                "bottomk() returns the lowest values.",
            ),
            SampleQuery(
                "topk(5, rate(demo_cpu_usage_seconds_total[5m]))",
                "Top 5 CPU consumers",
                "Combines topk with rate to find the highest CPU usage.",
            ),
            SampleQuery(
                "topk(3, histogram_quantile(0.95, sum by (instance, le) "
                "(rate(demo_api_request_duration_seconds_bucket[5m]))))",
                "Top 3 slowest instances",
                "Finds the instances with the highest p95 latency.",
            ),
            SampleQuery(
                "topk(5, sum by (job) (demo_memory_usage_bytes))",
                "Top 5 jobs by memory",
                "First aggregates by job, then takes the top 5.",
            ),
        ),
    ),
    Scenario(
        id="time-comparisons",
        title="Time Comparisons",
        description="Compare metrics across time using the offset modifier to detect changes.",
        learning_objectives=(
            "Use offset to look at historical data",
            "Calculate period-over-period changes",
            "Detect traffic pattern changes",
            "Build comparison queries",
        ),
        sample_queries=(
            SampleQuery(
                "demo_memory_usage_bytes",
                "Current memory usage",
                "Baseline query showing current memory usage.",
            ),
            SampleQuery(
                "demo_memory_usage_bytes offset 1h",
                "Memory usage 1 hour ago",
                'The "offset 1h" modifier shifts the query window back in time.',
            ),
            SampleQuery(
                "demo_memory_usage_bytes - demo_memory_usage_bytes offset 1h",
                "Memory change in 1 hour",
                "Subtracting historical from current gives the absolute change.",
            ),
            SampleQuery(
                "rate(demo_cpu_usage_seconds_total[5m]) "
                "/ rate(demo_cpu_usage_seconds_total[5m] offset 1h)",
                "CPU usage ratio vs 1h ago",
                "A value of 1.5 means 50% more CPU usage than an hour ago.",
            ),
            SampleQuery(
                "(demo_disk_usage_bytes - demo_disk_usage_bytes offset 24h) "
                "/ demo_disk_total_bytes * 100",
                "Disk growth in 24h (%)",
                "Disk growth over the last 24 hours as a percentage of total capacity.",
            ),
        ),
    ),
    Scenario(
        id="rate-windows",
        title="Rate Windows Explained",
        description="Understand how different rate() window sizes affect your metrics.",
        learning_objectives=(
            "Understand rate window behavior",
            "Choose appropriate window sizes",
            "Balance sensitivity vs smoothing",
            "Know the 4x scrape interval rule",
        ),
        sample_queries=(
            SampleQuery(
                "rate(demo_cpu_usage_seconds_total[1m])",
                "1 minute window (sensitive)",
                "Short windows react to brief changes but are noisier.",
            ),
            SampleQuery(
                "rate(demo_cpu_usage_seconds_total[5m])",
                "5 minute window (balanced)",
                "Smooths out fluctuations while still responding to real changes.",
            ),
            SampleQuery(
                "rate(demo_cpu_usage_seconds_total[15m])",
                "15 minute window (smooth)",
                "Longer windows produce smoother graphs for trend analysis.",
            ),
            SampleQuery(
                "irate(demo_cpu_usage_seconds_total[5m])",
                "Instant rate (last 2 points)",
                "irate() uses only the last two data points.",
            ),
            SampleQuery(
                "increase(demo_items_shipped_total[1h])",
                "Items shipped in 1 hour",
                "increase() returns the total increase over the window.",
            ),
        ),
    ),
)


def get_scenario(scenario_id: str) -> Scenario:
    """Return the scenario with the given id.

    Raises:
        ScenarioNotFoundError: If no scenario has that id
    """
    for scenario in SCENARIOS:
        if scenario.id == scenario_id:
            return scenario
    available = ", ".join(scenario.id for scenario in SCENARIOS)
    raise ScenarioNotFoundError(
        f"Unknown scenario: {scenario_id}. Available scenarios: {available}"
    )
