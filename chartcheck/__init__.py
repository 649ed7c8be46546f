"""chartcheck — render-and-assert harness for the auto-deploy-app Helm chart."""

__version__ = "0.1.0"
