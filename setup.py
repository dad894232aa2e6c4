from setuptools import setup, find_packages

with open("requirements.txt") as f:
	install_requires = [line.strip() for line in f if line.strip() and not line.startswith("#")]

setup(
	name="poi-service",
	version="1.0.0",
	description="POI bulk ingestion with full-collection replace and map queries",
	packages=find_packages(include=["poi_service", "poi_service.*"]),
	python_requires=">=3.10",
	zip_safe=False,
	include_package_data=True,
	install_requires=install_requires,
	extras_require={
		"test": [
			"pytest>=7.4",
			"pytest-asyncio>=0.23",
			"httpx>=0.26",
			"xlwt>=1.3",
		],
	},
)
