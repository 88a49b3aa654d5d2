"""
Core Package.

Contains the backend rewrite logic:
- Rewrite Engine
- Rewriter and Mixins
- ESTree helpers, walker and scope model
- Edit buffer and source maps
"""
