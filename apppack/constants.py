PLATFORM_FILE_EXTENSIONS = ("swift", "kt", "gradle", "xml", "java", "plist")

FILENAME_MARKER = "// Filename: "

XCODE_VERSION = "14.3.1"

ASSET_CATALOG_MARKER = "Assets.xcassets"

README_TEMPLATE = (
    "# {root}\n\n"
    "Generated by AppCraft AI\n\n"
    "## Getting Started\n\n"
    "This is a complete, runnable project generated by AI based on your requirements."
)

FALLBACK_README_TEMPLATE = (
    "# {app_name} ({platform_upper})\n\n"
    "Generated by AppCraft AI\n\n"
    "## Important Note\n\n"
    "This file contains the complete source code for your app. You'll need to "
    "properly organize these files into a standard {ide} project structure."
)

IOS_GITIGNORE = """# Xcode
#
build/
*.pbxuser
!default.pbxuser
*.mode1v3
!default.mode1v3
*.mode2v3
!default.mode2v3
*.perspectivev3
!default.perspectivev3
xcuserdata
*.xccheckout
*.moved-aside
DerivedData
*.hmap
*.ipa
*.xcuserstate
.DS_Store

# Swift Package Manager
.build/
Packages/
"""

IOS_APP_ICON_CONTENTS = {
    "images": [
        {
            "size": "60x60",
            "idiom": "iphone",
            "filename": "Icon-60@2x.png",
            "scale": "2x",
        },
        {
            "size": "60x60",
            "idiom": "iphone",
            "filename": "Icon-60@3x.png",
            "scale": "3x",
        },
    ],
    "info": {
        "version": 1,
        "author": "xcode",
    },
}

ANDROID_GITIGNORE = """*.iml
.gradle
/local.properties
/.idea/caches
/.idea/libraries
/.idea/modules.xml
/.idea/workspace.xml
/.idea/navEditor.xml
/.idea/assetWizardSettings.xml
.DS_Store
/build
/captures
.externalNativeBuild
.cxx
"""

ANDROID_GRADLE_PROPERTIES = """# Project-wide Gradle settings
org.gradle.jvmargs=-Xmx2048m -Dfile.encoding=UTF-8
android.useAndroidX=true
android.enableJetifier=true
kotlin.code.style=official
"""
